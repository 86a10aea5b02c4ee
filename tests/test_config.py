import pytest
from pydantic import ValidationError

from weather_informer.core.config import Settings


def test_forecast_max_days_defaults_to_six():
    assert Settings(_env_file=None).forecast_max_days == 6


@pytest.mark.parametrize("value", [0, 7, 8])
def test_forecast_max_days_out_of_range(value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, FORECAST_MAX_DAYS=value)


def test_forecast_max_days_accepts_smaller_cap():
    assert Settings(_env_file=None, FORECAST_MAX_DAYS=3).forecast_max_days == 3

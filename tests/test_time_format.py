from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from weather_informer.core.errors import InvalidInputError
from weather_informer.services.time_format import (
    icon_url,
    local_date_key,
    local_day_name,
    resolve_timezone,
    to_12_hour_clock,
)

UTC = ZoneInfo("UTC")
CHICAGO = ZoneInfo("America/Chicago")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2024-01-15 00:00:00", "12:00 AM"),
        ("2024-01-15 12:00:00", "12:00 PM"),
        ("2024-01-15 15:00:00", "3:00 PM"),
        ("2024-01-15 09:30:00", "9:30 AM"),
        ("2024-01-15T21:00:00", "9:00 PM"),
    ],
)
def test_to_12_hour_clock(text, expected):
    assert to_12_hour_clock(text) == expected


def test_icon_url():
    assert icon_url("01d") == "https://openweathermap.org/img/wn/01d@2x.png"
    assert icon_url("10n") == "https://openweathermap.org/img/wn/10n@2x.png"


def test_local_day_name_today():
    now = datetime(2024, 1, 15, 8, 0, tzinfo=UTC)
    assert local_day_name("2024-01-15", UTC, now) == "Today"


def test_local_day_name_weekdays():
    now = datetime(2024, 1, 10, 8, 0, tzinfo=UTC)
    assert local_day_name("2024-01-15", UTC, now) == "Monday"
    assert local_day_name("2024-01-16", UTC, now) == "Tuesday"
    assert local_day_name("2024-01-21", UTC, now) == "Sunday"


def test_local_day_name_uses_local_calendar():
    # 03:00 UTC on the 16th is still the evening of the 15th in Chicago
    now = datetime(2024, 1, 16, 3, 0, tzinfo=timezone.utc)
    assert local_day_name("2024-01-15", CHICAGO, now) == "Today"
    assert local_day_name("2024-01-16", CHICAGO, now) == "Tuesday"


def test_local_day_name_on_dst_change_day():
    # US spring-forward day; midnight-based parsing would be ambiguous here
    now = datetime(2024, 3, 10, 18, 0, tzinfo=CHICAGO)
    assert local_day_name("2024-03-10", CHICAGO, now) == "Today"


def test_local_date_key_converts_to_timezone():
    instant = datetime(2024, 1, 16, 3, 0, tzinfo=timezone.utc)
    assert local_date_key(instant, UTC) == "2024-01-16"
    assert local_date_key(instant, CHICAGO) == "2024-01-15"


def test_resolve_timezone():
    assert resolve_timezone("America/Chicago") == CHICAGO


def test_resolve_timezone_unknown():
    with pytest.raises(InvalidInputError):
        resolve_timezone("Mars/Olympus_Mons")

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class RawSample(BaseModel):
    """
    One 3-hour forecast point as returned by OpenWeatherMap.

    Validates either from the provider's nested list item
    (`main.temp`, `wind.speed`, `weather[0].main`, ...) or from the
    flat field names below.
    """

    model_config = ConfigDict(frozen=True)

    dt: datetime = Field(..., description="Absolute instant of the sample (UTC)")
    temp: float
    feels_like: float
    humidity: int
    wind_speed: float
    pop: float = Field(default=0.0, description="Precipitation probability (0-1)")
    condition: str = Field(..., description="Condition group, e.g. 'Rain'")
    description: str = ""
    icon: str = ""
    dt_txt: str = Field(..., description="Provider clock string 'YYYY-MM-DD HH:MM:SS'")

    @model_validator(mode="before")
    @classmethod
    def _flatten_provider_item(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "main" not in data:
            return data

        main = data.get("main") or {}
        wind = data.get("wind") or {}
        weather = (data.get("weather") or [{}])[0]
        return {
            "dt": data.get("dt"),
            "temp": main.get("temp"),
            "feels_like": main.get("feels_like"),
            "humidity": main.get("humidity"),
            "wind_speed": wind.get("speed", 0.0),
            "pop": data.get("pop", 0.0),
            "condition": weather.get("main"),
            "description": weather.get("description", ""),
            "icon": weather.get("icon", ""),
            "dt_txt": data.get("dt_txt"),
        }

    @field_validator("dt")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # Provider timestamps are unix seconds; naive values are treated as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class _OutputModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class HourlyRecord(_OutputModel):
    """
    Normalized 3-hour entry shown in the hourly drill-down.
    """

    time: str = Field(..., examples=["3:00 PM"])
    temp: int
    feels_like: int
    humidity: int
    wind_speed: int
    condition: str
    description: str
    icon: str
    pop: int = Field(..., ge=0, le=100, description="Precipitation probability (%)")


class DaySummary(_OutputModel):
    """
    Aggregated forecast for one local calendar day.
    """

    date: str = Field(..., description="Local calendar day (YYYY-MM-DD)", examples=["2024-01-15"])
    day_name: str = Field(..., examples=["Today", "Monday"])
    temp_high: int
    temp_low: int
    condition: str
    description: str
    icon: str
    humidity: int = Field(..., description="Average humidity (%)")
    wind_speed: int = Field(..., description="Average wind speed")
    hourly: List[HourlyRecord] = Field(default_factory=list)


class WeatherCondition(str, Enum):
    """Condition categories used to pick a visual theme."""

    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    DRIZZLE = "Drizzle"
    THUNDERSTORM = "Thunderstorm"
    SNOW = "Snow"
    MIST = "Mist"
    FOG = "Fog"
    HAZE = "Haze"
    DEFAULT = "Default"


class ProviderForecast(BaseModel):
    """
    Successful provider response reduced to what the aggregator needs.
    """

    city_name: str
    samples: List[RawSample] = Field(default_factory=list)


class ForecastResult(_OutputModel):
    """
    Response payload for a completed forecast search.
    """

    query: str = Field(..., description="Sanitized user input", examples=["Austin, TX"])
    city_name: str = Field(..., examples=["Austin, US"])
    current_condition: WeatherCondition = WeatherCondition.DEFAULT
    forecast: List[DaySummary] = Field(default_factory=list)
    sequence: int = Field(..., description="Monotonic search ticket")


class SearchError(_OutputModel):
    """
    Failure of the most recent search.
    """

    kind: str = Field(..., examples=["not-found"])
    message: str = Field(..., examples=["City not found. Please check your search and try again."])
    sequence: int = Field(..., description="Ticket of the failed search")


class CurrentForecastResponse(_OutputModel):
    """
    Current result slot: the latest published search, the error of the
    latest search when it failed, and the busy flag.
    """

    result: Optional[ForecastResult] = None
    error: Optional[SearchError] = None
    loading: bool = False

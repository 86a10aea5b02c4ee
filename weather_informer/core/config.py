from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings.

    This class loads configuration values from environment variables
    and optionally from a `.env` file. It uses Pydantic Settings
    to provide type validation and default values.

    Environment variables take precedence over `.env` values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ---------------------------------------------------------------------
    # Application settings
    # ---------------------------------------------------------------------

    app_name: str = Field(
        default="weather-informer",
        alias="APP_NAME",
        description="Application name displayed in logs and API documentation",
    )

    environment: str = Field(
        default="local",
        alias="ENVIRONMENT",
        description="Runtime environment (local, dev, prod)",
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:4173"],
        alias="CORS_ORIGINS",
        description="Exact origins allowed to call the API (JSON list)",
    )

    cors_origin_regex: str = Field(
        default=r"https://.*\.(vercel\.app|github\.io)",
        alias="CORS_ORIGIN_REGEX",
        description="Additional origins allowed to call the API, as a regular expression",
    )

    # ---------------------------------------------------------------------
    # Database settings
    # ---------------------------------------------------------------------

    database_url: str = Field(
        default="sqlite+aiosqlite:///./weather_informer.db",
        alias="DATABASE_URL",
        description="Database URL holding the recent searches store",
    )

    # ---------------------------------------------------------------------
    # OpenWeatherMap
    # ---------------------------------------------------------------------

    openweathermap_api_key: Optional[str] = Field(
        default=None,
        alias="OPENWEATHERMAP_API_KEY",
        description="API key used to authenticate requests to OpenWeatherMap",
    )

    owm_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/forecast",
        alias="OWM_BASE_URL",
        description="OpenWeatherMap 5-day/3-hour forecast endpoint",
    )

    owm_units: str = Field(
        default="imperial",
        alias="OWM_UNITS",
        description="Unit system requested from OpenWeatherMap (imperial = Fahrenheit, mph)",
    )

    owm_timeout_s: float = Field(
        default=10.0,
        alias="OWM_TIMEOUT_S",
        description="Timeout in seconds for OpenWeatherMap requests",
    )

    # ---------------------------------------------------------------------
    # Forecast presentation
    # ---------------------------------------------------------------------

    local_timezone: str = Field(
        default="America/New_York",
        alias="LOCAL_TIMEZONE",
        description="IANA timezone used for calendar-day grouping when the client sends none",
    )

    forecast_max_days: int = Field(
        default=6,
        alias="FORECAST_MAX_DAYS",
        ge=1,
        le=6,
        description="Maximum number of daily summaries returned per forecast",
    )

    recent_searches_max: int = Field(
        default=5,
        alias="RECENT_SEARCHES_MAX",
        ge=1,
        description="Number of recent search queries kept",
    )


# Singleton settings instance
settings = Settings()

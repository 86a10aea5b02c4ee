from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from weather_informer.core.config import settings
from weather_informer.core.errors import (
    ConfigurationError,
    InvalidInputError,
    LocationNotFoundError,
    NetworkError,
    UpstreamError,
)
from weather_informer.schemas.forecast import ProviderForecast, RawSample

logger = logging.getLogger(__name__)

# "90210,US" style queries go through the `zip` parameter
PROVIDER_ZIP_RE = re.compile(r"\d{5},\w{2}")

MAX_QUERY_LENGTH = 100


class OpenWeatherMapClient:
    """
    OpenWeatherMap 5-day/3-hour forecast client.

    Endpoint: GET https://api.openweathermap.org/data/2.5/forecast
    with `q=<city>,<state>,<country>` or `zip=<zip>,<country>`, plus
    `appid` and `units`.

    Provider failures are translated into the application error types
    (`LocationNotFoundError`, `ConfigurationError`, ...), so callers
    never see raw httpx exceptions.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        units: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.openweathermap_api_key
        self.base_url = base_url or settings.owm_base_url
        self.units = units or settings.owm_units
        self.timeout = timeout_s if timeout_s is not None else settings.owm_timeout_s
        self.transport = transport

    def _params(self, query: str) -> Dict[str, str]:
        if not query:
            raise InvalidInputError("Missing required parameter: q")
        if len(query) > MAX_QUERY_LENGTH:
            raise InvalidInputError("Query parameter too long")
        if not self.api_key:
            raise ConfigurationError(
                "Weather API key not configured. "
                "Please set OPENWEATHERMAP_API_KEY environment variable."
            )

        params = {"appid": self.api_key, "units": self.units}
        # The provider uses `zip` for zip codes and `q` for city names
        if PROVIDER_ZIP_RE.fullmatch(query):
            params["zip"] = query
        else:
            params["q"] = query
        return params

    @staticmethod
    def _error_message(r: httpx.Response) -> str:
        try:
            payload = r.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return f"Weather service returned {r.status_code}"

    async def fetch_raw(self, query: str) -> Dict[str, Any]:
        """
        Fetch the provider's forecast payload for an already formatted query.

        Raises:
            InvalidInputError: empty or too long query, or a 400 from the provider.
            ConfigurationError: no API key, or the provider rejected it (401).
            LocationNotFoundError: the provider knows no such location (404).
            UpstreamError: any other non-2xx provider response.
            NetworkError: the provider could not be reached.
        """
        params = self._params(query)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.base_url, params=params, headers={"accept": "application/json"})
        except httpx.HTTPError as e:
            logger.error("Weather provider request failed: %s", e)
            raise NetworkError("Unable to connect to weather service. Please try again later.") from e

        if r.status_code == 404:
            raise LocationNotFoundError("City not found. Please check your search and try again.")
        if r.status_code == 401:
            logger.error("Weather provider rejected the configured API key")
            raise ConfigurationError("Weather API authentication failed. Please contact the administrator.")
        if r.status_code == 400:
            raise InvalidInputError(self._error_message(r))
        if r.is_error:
            message = self._error_message(r)
            logger.warning("Weather provider error %s: %s", r.status_code, message)
            raise UpstreamError(message, status_code=r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise UpstreamError("Weather service returned an unreadable response.") from e

    async def fetch_forecast(self, query: str) -> ProviderForecast:
        """
        Fetch and parse the forecast for `query`.

        Returns:
            The resolved location ("Austin, US") and the raw samples in
            provider order.
        """
        data = await self.fetch_raw(query)

        city = data.get("city") or {}
        name = city.get("name") or query
        country = city.get("country")
        city_name = f"{name}, {country}" if country else name

        try:
            samples = [RawSample.model_validate(item) for item in data.get("list") or []]
        except ValidationError as e:
            logger.warning("Malformed forecast payload for %r: %s", query, e)
            raise UpstreamError("Weather service returned malformed forecast data.") from e

        logger.info("Fetched %d forecast samples for %s", len(samples), city_name)
        return ProviderForecast(city_name=city_name, samples=samples)


def get_weather_client() -> OpenWeatherMapClient:
    """
    FastAPI dependency returning a client built from settings.
    Tests override it with a client using a mock transport.
    """
    return OpenWeatherMapClient()

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from weather_informer.core.config import settings
from weather_informer.core.errors import InvalidInputError
from weather_informer.repositories.kv_repository import KeyValueRepository
from weather_informer.schemas.forecast import ForecastResult, WeatherCondition
from weather_informer.schemas.search import InvalidQuery
from weather_informer.services.aggregation import transform_forecast_data
from weather_informer.services.conditions import map_owm_condition
from weather_informer.services.providers.openweathermap_client import OpenWeatherMapClient
from weather_informer.services.recent_searches import RecentSearches
from weather_informer.services.search_state import SearchState
from weather_informer.services.time_format import resolve_timezone
from weather_informer.services.validation import classify, format_for_provider

logger = logging.getLogger(__name__)

INVALID_QUERY_MESSAGE = "Please enter a valid US city name or 5-digit zip code."


class ForecastService:
    """
    Runs one forecast search end to end:
    classify -> format -> fetch -> aggregate -> publish.
    """

    def __init__(
        self,
        db: AsyncSession,
        client: OpenWeatherMapClient,
        recent: RecentSearches,
        state: SearchState,
    ):
        self.db = db
        self.client = client
        self.recent = recent
        self.state = state
        self.kv_repo = KeyValueRepository(db)

    async def search(
        self,
        query: str,
        tz_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ForecastResult:
        """
        Search the forecast for free-text `query`.

        Invalid input is rejected before any network call. On success the
        result is published to the shared slot (unless a newer search
        already finished) and the query is recorded as a recent search.
        Failures, invalid input included, are recorded as the slot's error.

        Raises:
            InvalidInputError: the query or timezone is invalid.
            WeatherInformerError: any provider failure, unchanged.
        """
        ticket = self.state.begin()
        try:
            validation = classify(query)
            if isinstance(validation, InvalidQuery):
                raise InvalidInputError(INVALID_QUERY_MESSAGE)

            tz = resolve_timezone(tz_name)
            provider_query = format_for_provider(validation.sanitized, validation.kind)
            logger.info("Search #%d: %r -> %r", ticket, validation.sanitized, provider_query)

            payload = await self.client.fetch_forecast(provider_query)
            forecast = transform_forecast_data(
                payload.samples,
                tz=tz,
                now=now,
                max_days=settings.forecast_max_days,
            )
            condition = map_owm_condition(forecast[0].condition) if forecast else WeatherCondition.DEFAULT

            result = ForecastResult(
                query=validation.sanitized,
                city_name=payload.city_name,
                current_condition=condition,
                forecast=forecast,
                sequence=ticket,
            )
        except Exception as e:
            self.state.fail(ticket, e)
            raise
        finally:
            self.state.finish(ticket)

        self.state.publish(ticket, result)
        self.recent.add(validation.sanitized)
        await self.recent.save(self.kv_repo)
        return result

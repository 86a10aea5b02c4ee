from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from weather_informer.core.db import get_db
from weather_informer.core.state import get_recent_searches, get_search_state
from weather_informer.schemas.forecast import CurrentForecastResponse, ForecastResult
from weather_informer.schemas.search import InvalidQuery, ValidationResponse
from weather_informer.services.forecast_service import ForecastService
from weather_informer.services.providers.openweathermap_client import (
    OpenWeatherMapClient,
    get_weather_client,
)
from weather_informer.services.recent_searches import RecentSearches
from weather_informer.services.search_state import SearchState
from weather_informer.services.validation import classify, format_for_provider

router = APIRouter(tags=["Forecast"])


@router.get(
    "/validate",
    response_model=ValidationResponse,
    summary="Classify search input",
    description=(
        "Classifies free text as a US zip code, a US city (optionally with a state "
        "abbreviation) or invalid input. No provider call is made."
    ),
)
def validate(q: str = Query(default="", description="Raw search input")):
    result = classify(q)
    provider_query = None
    if not isinstance(result, InvalidQuery):
        provider_query = format_for_provider(result.sanitized, result.kind)
    return ValidationResponse(result=result, provider_query=provider_query)


@router.get(
    "/forecast",
    response_model=ForecastResult,
    summary="Search the daily forecast",
    description=(
        "Validates the query, fetches the 5-day/3-hour forecast and returns up to six "
        "daily summaries grouped by local calendar day, each with its hourly entries.\n\n"
        "- `tz`: IANA timezone defining the local day (defaults to `LOCAL_TIMEZONE`)\n"
        "- Successful searches are added to the recent searches list"
    ),
)
async def search_forecast(
    q: str = Query(..., description="City name (`Austin, TX`) or 5-digit zip code"),
    tz: Optional[str] = Query(default=None, description="IANA timezone, e.g. America/Chicago"),
    db: AsyncSession = Depends(get_db),
    client: OpenWeatherMapClient = Depends(get_weather_client),
    recent: RecentSearches = Depends(get_recent_searches),
    state: SearchState = Depends(get_search_state),
):
    service = ForecastService(db=db, client=client, recent=recent, state=state)
    return await service.search(q, tz_name=tz)


@router.get(
    "/forecast/current",
    response_model=CurrentForecastResponse,
    summary="Latest forecast result",
    description=(
        "Returns the most recent published search result, the error of the latest search "
        "when it failed, and whether a search is in flight."
    ),
)
def current_forecast(state: SearchState = Depends(get_search_state)):
    return CurrentForecastResponse(result=state.current, error=state.error, loading=state.loading)

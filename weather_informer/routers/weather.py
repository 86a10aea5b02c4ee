from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from weather_informer.services.providers.openweathermap_client import (
    OpenWeatherMapClient,
    get_weather_client,
)

router = APIRouter(prefix="/api", tags=["Proxy"])

# Shared caches may keep a forecast for 10 minutes
CACHE_CONTROL = "s-maxage=600, stale-while-revalidate=300"


@router.get(
    "/weather",
    summary="Forecast proxy",
    description=(
        "Forwards a query to the OpenWeatherMap 5-day/3-hour forecast API and returns "
        "the provider payload unchanged, keeping the API key server-side.\n\n"
        "- `q`: city (`Austin,TX,US`) or zip code with country (`90210,US`)\n"
        "- Errors are returned as `{\"error\": message}`"
    ),
)
async def weather_proxy(
    q: Optional[str] = Query(default=None, description="Provider-formatted query"),
    client: OpenWeatherMapClient = Depends(get_weather_client),
):
    data = await client.fetch_raw(q or "")
    return JSONResponse(content=data, headers={"Cache-Control": CACHE_CONTROL})

import httpx
import pytest

from weather_informer.core.errors import (
    ConfigurationError,
    InvalidInputError,
    LocationNotFoundError,
    NetworkError,
    UpstreamError,
)
from weather_informer.services.providers.openweathermap_client import OpenWeatherMapClient


@pytest.mark.asyncio
async def test_fetch_forecast_parses_payload(weather_client, provider):
    result = await weather_client.fetch_forecast("Austin,TX,US")

    assert result.city_name == "Austin, US"
    assert len(result.samples) == 40
    assert result.samples[0].dt_txt == "2024-01-15 00:00:00"

    (request,) = provider.requests
    assert request.url.params["q"] == "Austin,TX,US"
    assert request.url.params["appid"] == "test-key"
    assert request.url.params["units"] == "imperial"
    assert "zip" not in request.url.params


@pytest.mark.asyncio
async def test_zip_query_uses_zip_parameter(weather_client, provider):
    await weather_client.fetch_raw("90210,US")

    (request,) = provider.requests
    assert request.url.params["zip"] == "90210,US"
    assert "q" not in request.url.params


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, body, error, message",
    [
        (404, {"cod": "404", "message": "city not found"}, LocationNotFoundError, "City not found"),
        (401, {"cod": 401, "message": "Invalid API key"}, ConfigurationError, "authentication failed"),
        (400, {"cod": "400", "message": "bad query"}, InvalidInputError, "bad query"),
        (503, {"message": "try later"}, UpstreamError, "try later"),
        (500, None, UpstreamError, "Weather service returned 500"),
    ],
)
async def test_provider_errors_are_mapped(weather_client, provider, status, body, error, message):
    provider.status = status
    provider.json = body

    with pytest.raises(error) as exc_info:
        await weather_client.fetch_raw("Austin,US")

    assert message in exc_info.value.message


@pytest.mark.asyncio
async def test_upstream_status_is_kept(weather_client, provider):
    provider.status = 429
    provider.json = {"message": "rate limited"}

    with pytest.raises(UpstreamError) as exc_info:
        await weather_client.fetch_raw("Austin,US")

    assert exc_info.value.status_code == 429


@pytest.mark.asyncio
async def test_transport_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = OpenWeatherMapClient(api_key="k", transport=httpx.MockTransport(handler))

    with pytest.raises(NetworkError):
        await client.fetch_raw("Austin,US")


@pytest.mark.asyncio
async def test_missing_api_key():
    client = OpenWeatherMapClient()
    # settings may carry a key from the environment
    client.api_key = None

    with pytest.raises(ConfigurationError):
        await client.fetch_raw("Austin,US")


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "x" * 101])
async def test_query_rejected_before_request(weather_client, provider, query):
    with pytest.raises(InvalidInputError):
        await weather_client.fetch_raw(query)

    assert provider.requests == []


@pytest.mark.asyncio
async def test_malformed_list_is_upstream_error(weather_client, provider):
    provider.json = {"city": {"name": "Austin", "country": "US"}, "list": [{"dt": 1}]}

    with pytest.raises(UpstreamError):
        await weather_client.fetch_forecast("Austin,US")


@pytest.mark.asyncio
async def test_empty_list(weather_client, provider):
    provider.json = {"city": {"name": "Austin", "country": "US"}, "list": []}

    result = await weather_client.fetch_forecast("Austin,US")

    assert result.samples == []

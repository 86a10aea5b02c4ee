from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from weather_informer.core.db import get_db
from weather_informer.main import app
from weather_informer.models import Base
from weather_informer.services.providers.openweathermap_client import (
    OpenWeatherMapClient,
    get_weather_client,
)
from weather_informer.services.recent_searches import RecentSearches
from weather_informer.services.search_state import SearchState

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    In-memory SQLite async engine with all tables created.
    StaticPool keeps every session on the same in-memory database.
    """
    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine):
    """
    Provide a fresh AsyncSession for each test.
    """
    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def owm_item():
    """
    Factory for OpenWeatherMap forecast list items.

    `when` is the provider clock string (UTC); `dt` is derived from it.
    """

    def make(
        when: str = "2024-01-15 12:00:00",
        temp: float = 72,
        feels_like: float = 70,
        humidity: int = 55,
        wind: float = 8,
        pop: float = 0.1,
        main: str = "Clear",
        description: str = "clear sky",
        icon: str = "01d",
    ) -> dict:
        dt = datetime.fromisoformat(when).replace(tzinfo=timezone.utc)
        return {
            "dt": int(dt.timestamp()),
            "main": {
                "temp": temp,
                "feels_like": feels_like,
                "temp_min": temp - 3,
                "temp_max": temp + 3,
                "pressure": 1013,
                "humidity": humidity,
            },
            "weather": [{"id": 800, "main": main, "description": description, "icon": icon}],
            "clouds": {"all": 5},
            "wind": {"speed": wind, "deg": 180},
            "visibility": 10000,
            "pop": pop,
            "dt_txt": when,
        }

    return make


@pytest.fixture
def owm_response(owm_item):
    """
    Factory for a full provider payload: `days` days of 8 samples each,
    starting on 2024-01-15 (a Monday).
    """

    def make(days: int = 5, start_day: int = 15) -> dict:
        items = []
        for day in range(days):
            for hour in range(0, 24, 3):
                items.append(
                    owm_item(
                        when=f"2024-01-{start_day + day:02d} {hour:02d}:00:00",
                        temp=60 + day + hour / 3,
                        humidity=45 + day * 5,
                        main="Clear" if day % 2 == 0 else "Clouds",
                        description="clear sky" if day % 2 == 0 else "scattered clouds",
                        icon="01d" if day % 2 == 0 else "03d",
                    )
                )
        return {
            "cod": "200",
            "message": 0,
            "cnt": len(items),
            "list": items,
            "city": {"id": 1, "name": "Austin", "country": "US", "timezone": -21600},
        }

    return make


@pytest.fixture
def provider(owm_response):
    """
    Mutable fake provider: tests set `status` / `json` before calling,
    then inspect `requests`.
    """

    class FakeProvider:
        def __init__(self):
            self.status = 200
            self.json = owm_response()
            self.requests: list[httpx.Request] = []

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(self.status, json=self.json)

    return FakeProvider()


@pytest.fixture
def weather_client(provider):
    return OpenWeatherMapClient(
        api_key="test-key",
        base_url="https://owm.test/data/2.5/forecast",
        transport=httpx.MockTransport(provider.handler),
    )


@pytest.fixture
def test_app(db_session, weather_client):
    """
    Return the FastAPI app with the DB session and the weather client
    overridden, and fresh app-owned state.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_weather_client] = lambda: weather_client
    app.state.recent_searches = RecentSearches()
    app.state.search_state = SearchState()
    yield app
    app.dependency_overrides.clear()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_informer.core.config import settings
from weather_informer.core.db import AsyncSessionLocal
from weather_informer.core.errors import WeatherInformerError, error_kind, to_user_message
from weather_informer.core.init_db import init_db
from weather_informer.core.logging import configure_logging
from weather_informer.repositories.kv_repository import KeyValueRepository
from weather_informer.routers.forecast import router as forecast_router
from weather_informer.routers.health import router as health_router
from weather_informer.routers.recent_searches import router as recent_searches_router
from weather_informer.routers.weather import router as weather_router
from weather_informer.services.recent_searches import RecentSearches
from weather_informer.services.search_state import SearchState

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    On startup:
    - Creates the database schema if needed.
    - Loads the persisted recent searches into the app-owned state.
    """
    await init_db()
    async with AsyncSessionLocal() as session:
        items = await app.state.recent_searches.load(KeyValueRepository(session))
    logger.info("Loaded %d recent searches", len(items))
    yield


async def weather_error_handler(request: Request, exc: WeatherInformerError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": to_user_message(exc), "kind": error_kind(exc)},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": to_user_message(exc), "kind": error_kind(exc)},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
    - Configures logging from `LOG_LEVEL`.
    - Attaches the app-owned state (recent searches, current result slot).
    - Registers CORS, error handlers and all API routers.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Weather Informer API: US city/zip forecast lookup with daily summaries",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.recent_searches = RecentSearches(max_items=settings.recent_searches_max)
    app.state.search_state = SearchState()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(WeatherInformerError, weather_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Register API routers
    app.include_router(health_router)
    app.include_router(weather_router)
    app.include_router(forecast_router)
    app.include_router(recent_searches_router)

    return app


# Application entry point
app = create_app()

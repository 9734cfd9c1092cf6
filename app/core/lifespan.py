"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Creates the process-wide
resources (SQL engine, Redis cache, UserService) once; every request reuses
them. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence import database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), SQL engine (and tables when
    database_auto_create), Redis cache (if enabled), UserService.
    Shutdown order: cache disconnect, SQL engine dispose, telemetry shutdown.
    A cache that cannot connect leaves the service running without it.
    """
    settings = get_settings()

    # ---- Startup ----
    telemetry = None
    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    database.get_session_factory()
    if telemetry is not None:
        telemetry.instrument_sqlalchemy(database.engine)
    if settings.database_auto_create:
        await database.create_tables()

    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis cache disabled by configuration")

    from app.api.v1.dependencies import build_user_service
    from app.application.services.cache_observer import LoggingCacheFailureObserver

    app.state.cache_observer = LoggingCacheFailureObserver()
    app.state.user_service = build_user_service(
        settings, app.state.cache, app.state.cache_observer
    )
    logger.info("User service ready")

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    await database.dispose_engine()

    if telemetry is not None:
        telemetry.shutdown()

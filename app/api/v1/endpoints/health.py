"""Health check endpoint. Used for liveness probes; reports cache state without failing on it."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_cache, get_cache_observer
from app.application.services.cache_observer import LoggingCacheFailureObserver
from app.infrastructure.cache.redis_cache import CacheService
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check(
    cache: Annotated[CacheService | None, Depends(get_cache)],
    observer: Annotated[LoggingCacheFailureObserver | None, Depends(get_cache_observer)],
) -> HealthResponse:
    """Return ok; cache is "connected", "unavailable", or "disabled"."""
    failures = observer.failure_counts if observer is not None else {}
    if cache is None:
        return HealthResponse(cache="disabled", cache_failures=failures)
    state = "connected" if await cache.ping() else "unavailable"
    return HealthResponse(cache=state, cache_failures=failures)

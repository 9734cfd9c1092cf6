"""Presentation-layer dependency injection (composition root).

The UserService is built once at startup (app.core.lifespan) from the shared
engine and cache and stored on app.state; routes depend on it through
get_user_service, never on infrastructure directly. Tests override
get_user_service via app.dependency_overrides.
"""

from __future__ import annotations

from fastapi import Request

from app.application.services.cache_observer import LoggingCacheFailureObserver
from app.application.services.user_service import UserService
from app.core.config import Settings
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.infrastructure.security.password import PasswordHasher


def build_user_service(
    settings: Settings,
    cache: CacheService | None,
    observer: LoggingCacheFailureObserver | None = None,
) -> UserService:
    """Wire UserService from infrastructure implementations."""
    return UserService(
        user_repo=UserRepository(get_session_factory()),
        cache=cache,
        password_hasher=PasswordHasher(),
        observer=observer,
        cache_ttl=settings.cache_ttl_users,
        fill_on_miss=settings.cache_fill_on_miss,
    )


def get_cache(request: Request) -> CacheService | None:
    """Shared cache created at startup (None when Redis is disabled)."""
    return getattr(request.app.state, "cache", None)


def get_cache_observer(request: Request) -> LoggingCacheFailureObserver | None:
    """Shared cache failure observer created at startup."""
    return getattr(request.app.state, "cache_observer", None)


def get_user_service(request: Request) -> UserService:
    """Shared UserService created at startup."""
    return request.app.state.user_service

"""Application services: user CRUD with cache-aside caching."""

from app.application.services.cache_observer import LoggingCacheFailureObserver
from app.application.services.user_service import UserService

__all__ = ["LoggingCacheFailureObserver", "UserService"]

"""Application layer: interfaces, DTOs, services.

Depends only on domain, core and protocol definitions (DIP).
Infrastructure implements the interfaces (primary store, cache, hasher).
"""

from app.application.interfaces import (
    ICacheFailureObserver,
    ICacheService,
    IPasswordHasher,
    IUserRepository,
)
from app.application.services.user_service import UserService

__all__ = [
    "ICacheFailureObserver",
    "ICacheService",
    "IPasswordHasher",
    "IUserRepository",
    "UserService",
]

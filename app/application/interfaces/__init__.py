"""Application interfaces (ports): repository and service protocols."""

from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import (
    ICacheFailureObserver,
    ICacheService,
    IPasswordHasher,
)

__all__ = [
    "ICacheFailureObserver",
    "ICacheService",
    "IPasswordHasher",
    "IUserRepository",
]

"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = ["BaseRepository", "UserRepository"]

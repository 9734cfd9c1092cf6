"""Repository interfaces (ports) for the application layer.

Protocols define contracts for the primary store (DIP). The SQLAlchemy
implementation lives in app.infrastructure.persistence.repositories.
"""

from __future__ import annotations

from typing import Any, Protocol

from app.application.dtos.user import UserRecord


# User repository interface (primary store)
class IUserRepository(Protocol):
    """Protocol for the authoritative user store.

    Each method is atomic for a single record and commits before returning.
    The store is the sole authority for email uniqueness. Implementations
    raise StorageException when the store is unreachable or rejects the
    operation, and DuplicateResourceException on a unique-email violation.
    """

    async def get_by_field(self, field: str, value: Any) -> UserRecord | None:
        """Return the single user whose unique field equals value, or None."""

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return user by ID, or None."""

    async def create_user(
        self,
        email: str,
        hashed_password: str,
        profile: dict[str, Any],
    ) -> UserRecord:
        """Insert a user; the store assigns id and timestamps."""

    async def update_by_id(
        self, user_id: int, changes: dict[str, Any]
    ) -> UserRecord | None:
        """Apply changes and return the post-update user, or None if absent.

        The "profile" key, when present, is merged key-wise into the stored profile.
        """

    async def delete_by_id(self, user_id: int) -> bool:
        """Delete user; return True if a row was removed."""

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserRecord]:
        """Return users newest first with pagination."""

"""Service interfaces (ports) for the application layer.

Protocols define contracts for the cache, the credential hasher, and the
cache-failure observation channel (DIP).
"""

from __future__ import annotations

from typing import Protocol


# Cache interface
class ICacheService(Protocol):
    """Best-effort key-value cache holding serialized records.

    Implementations raise on failure (connection, timeout, server error)
    and own reconnection; callers must treat every call as fallible and
    keep calling so a recovered cache is picked up again.
    """

    async def get(self, key: str) -> str | None:
        """Return the stored text or None on miss."""

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store value, with TTL in seconds when given."""

    async def delete(self, key: str) -> None:
        """Remove key (no-op if missing)."""


# Credential hashing interface
class IPasswordHasher(Protocol):
    """One-way, salted credential hashing."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash of password."""

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Return True if plain_password matches hashed_password."""


# Cache failure observation interface
class ICacheFailureObserver(Protocol):
    """Receives non-fatal cache failures so operators can see them."""

    def cache_failed(self, operation: str, key: str, error: BaseException) -> None:
        """Record a failed cache operation (get, set, delete, decode)."""

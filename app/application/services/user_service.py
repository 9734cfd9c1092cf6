"""User application service: CRUD over the primary store with a cache-aside Redis cache.

Ordering rules:
- The cache is written only after the primary store has committed
  (create/update), and invalidated only after a committed delete.
- A read is served from the cache on a hit; on a miss or any cache failure
  it falls through to the primary store.
- Cache failures (connection, timeout, malformed payload) are reported to
  the observer and never change the result of the operation. Primary store
  errors propagate unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from app.application.dtos.user import UserCreate, UserPatch, UserRecord
from app.application.interfaces import (
    ICacheFailureObserver,
    ICacheService,
    IPasswordHasher,
    IUserRepository,
)
from app.application.services.cache_observer import LoggingCacheFailureObserver
from app.application.services.user_cache_codec import user_from_cache, user_to_cache
from app.core.cache_keys import user_key
from app.core.constants import DEFAULT_CACHE_TTL_USERS
from app.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserService:
    """Create, read, update, delete and list users.

    The only component that touches both the primary store and the cache.
    Holds no mutable state of its own; one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        cache: ICacheService | None,
        password_hasher: IPasswordHasher,
        observer: ICacheFailureObserver | None = None,
        *,
        cache_ttl: int = DEFAULT_CACHE_TTL_USERS,
        fill_on_miss: bool = True,
    ) -> None:
        """Initialize with injected collaborators.

        Args:
            user_repo: Primary store (authoritative).
            cache: Best-effort cache; None disables caching entirely.
            password_hasher: One-way credential hasher.
            observer: Receives cache failures; defaults to logging.
            cache_ttl: TTL in seconds for every cache entry written.
            fill_on_miss: Populate the cache after a miss served by the store.
        """
        self._user_repo = user_repo
        self._cache = cache
        self._hasher = password_hasher
        self._observer = observer or LoggingCacheFailureObserver()
        self._cache_ttl = cache_ttl
        self._fill_on_miss = fill_on_miss

    # ---- Cache guard ----

    async def _cache_call(
        self,
        operation: str,
        key: str,
        call: Callable[[ICacheService], Awaitable[T]],
    ) -> tuple[bool, T | None]:
        """Run one cache operation. Returns (ok, result); failures go to the observer."""
        if self._cache is None:
            return False, None
        try:
            return True, await call(self._cache)
        # Any cache failure is contained here so it cannot fail the surrounding operation.
        except Exception as e:
            self._observer.cache_failed(operation, key, e)
            return False, None

    async def _cache_write(self, user: UserRecord) -> None:
        key = user_key(user.id)
        await self._cache_call(
            "set",
            key,
            lambda cache: cache.set(key, user_to_cache(user), ttl=self._cache_ttl),
        )

    async def _cache_read(self, user_id: int) -> tuple[bool, UserRecord | None]:
        """Return (reachable, record). reachable is False only when the cache call itself failed.

        A payload that does not decode counts as a miss on a reachable cache.
        """
        key = user_key(user_id)
        ok, raw = await self._cache_call("get", key, lambda cache: cache.get(key))
        if not ok or raw is None:
            return ok, None
        try:
            user = user_from_cache(raw)
        except (ValueError, TypeError) as e:
            self._observer.cache_failed("decode", key, e)
            return True, None
        if user.id != user_id:
            self._observer.cache_failed(
                "decode", key, ValueError(f"cached id {user.id} does not match key")
            )
            return True, None
        return True, user

    # ---- Operations ----

    @traced("user_service.create")
    async def create(self, data: UserCreate) -> UserRecord:
        """Create a user and cache it.

        Raises:
            DuplicateResourceException: Email already registered.
            StorageException: Primary store failure.
        """
        existing = await self._user_repo.get_by_field("email", data.email)
        if existing is not None:
            raise DuplicateResourceException("user", "email", data.email)
        hashed = await asyncio.to_thread(self._hasher.hash_password, data.password)
        user = await self._user_repo.create_user(
            email=data.email,
            hashed_password=hashed,
            profile=dict(data.profile),
        )
        logger.info("User created: id=%s", user.id)
        await self._cache_write(user)
        return user

    @traced("user_service.read")
    async def read(self, user_id: int) -> UserRecord:
        """Return user by id, from the cache when it holds a valid entry.

        Raises:
            ResourceNotFoundException: No such user in the primary store.
            StorageException: Primary store failure.
        """
        reachable, cached = await self._cache_read(user_id)
        if cached is not None:
            return cached
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if reachable and self._fill_on_miss:
            await self._cache_write(user)
        return user

    @traced("user_service.update")
    async def update(self, user_id: int, patch: UserPatch) -> UserRecord:
        """Apply a partial update and overwrite the cache entry with the committed result.

        A new password is hashed before it reaches the store.

        Raises:
            ValidationException: Patch has nothing to change.
            ResourceNotFoundException: No such user.
            DuplicateResourceException: New email already registered.
            StorageException: Primary store failure.
        """
        if patch.is_empty():
            raise ValidationException(
                "At least one of email, password or profile is required"
            )
        changes: dict[str, Any] = {}
        if patch.email is not None:
            changes["email"] = patch.email
        if patch.password is not None:
            changes["hashed_password"] = await asyncio.to_thread(
                self._hasher.hash_password, patch.password
            )
        if patch.profile:
            changes["profile"] = dict(patch.profile)
        user = await self._user_repo.update_by_id(user_id, changes)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        logger.info("User updated: id=%s fields=%s", user_id, sorted(changes))
        await self._cache_write(user)
        return user

    @traced("user_service.delete")
    async def delete(self, user_id: int) -> bool:
        """Delete user; invalidate its cache entry only if a row was removed.

        Returns:
            True if a user was deleted, False if it was already absent.

        Raises:
            StorageException: Primary store failure.
        """
        deleted = await self._user_repo.delete_by_id(user_id)
        if not deleted:
            return False
        logger.info("User deleted: id=%s", user_id)
        key = user_key(user_id)
        await self._cache_call("delete", key, lambda cache: cache.delete(key))
        return True

    @traced("user_service.list")
    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserRecord]:
        """List users from the primary store (not cached)."""
        return await self._user_repo.list_users(skip=skip, limit=limit)

"""In-memory test doubles for the primary store, the cache, and the failure observer."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from app.application.dtos.user import UserRecord
from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.exceptions import CacheDegradedError, StorageException


class InMemoryUserRepository:
    """IUserRepository double. Ids start at 1; set fail=True to simulate an outage."""

    def __init__(self) -> None:
        self.rows: dict[int, UserRecord] = {}
        self.calls: list[str] = []
        self.fail = False
        self._next_id = 1

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail:
            raise StorageException(operation, "primary store unreachable")

    def count_by_email(self, email: str) -> int:
        return sum(1 for u in self.rows.values() if u.email == email)

    async def get_by_field(self, field: str, value: Any) -> UserRecord | None:
        self._enter("get_by_field")
        return next((u for u in self.rows.values() if getattr(u, field) == value), None)

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        self._enter("get_by_id")
        return self.rows.get(user_id)

    async def create_user(
        self, email: str, hashed_password: str, profile: dict[str, Any]
    ) -> UserRecord:
        self._enter("create_user")
        if self.count_by_email(email):
            raise DuplicateResourceException("user", "email", email)
        now = datetime.now(timezone.utc)
        user = UserRecord(
            id=self._next_id,
            email=email,
            hashed_password=hashed_password,
            profile=dict(profile),
            created_at=now,
            updated_at=now,
        )
        self.rows[user.id] = user
        self._next_id += 1
        return user

    async def update_by_id(self, user_id: int, changes: dict[str, Any]) -> UserRecord | None:
        self._enter("update_by_id")
        current = self.rows.get(user_id)
        if current is None:
            return None
        if "email" in changes and any(
            u.email == changes["email"] and u.id != user_id for u in self.rows.values()
        ):
            raise DuplicateResourceException("user", "email", changes["email"])
        updates: dict[str, Any] = {
            k: v for k, v in changes.items() if k in ("email", "hashed_password")
        }
        if changes.get("profile"):
            updates["profile"] = {**current.profile, **changes["profile"]}
        updated = replace(current, updated_at=datetime.now(timezone.utc), **updates)
        self.rows[user_id] = updated
        return updated

    async def delete_by_id(self, user_id: int) -> bool:
        self._enter("delete_by_id")
        return self.rows.pop(user_id, None) is not None

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserRecord]:
        self._enter("list_users")
        ordered = sorted(self.rows.values(), key=lambda u: u.id, reverse=True)
        return ordered[skip : skip + limit]


class InMemoryCache:
    """ICacheService double.

    Add operation names ("get", "set", "delete") or "*" to failing to make
    those calls raise error_factory(operation, key).
    """

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.calls: list[tuple[str, str]] = []
        self.failing: set[str] = set()
        self.error_factory = lambda operation, key: CacheDegradedError(
            operation, key, "simulated outage"
        )

    def _enter(self, operation: str, key: str) -> None:
        self.calls.append((operation, key))
        if operation in self.failing or "*" in self.failing:
            raise self.error_factory(operation, key)

    async def get(self, key: str) -> str | None:
        self._enter("get", key)
        return self.data.get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        self._enter("set", key)
        self.data[key] = value
        self.ttls[key] = ttl

    async def delete(self, key: str) -> None:
        self._enter("delete", key)
        self.data.pop(key, None)
        self.ttls.pop(key, None)


class RecordingObserver:
    """ICacheFailureObserver double that keeps every reported failure."""

    def __init__(self) -> None:
        self.failures: list[tuple[str, str, BaseException]] = []

    def cache_failed(self, operation: str, key: str, error: BaseException) -> None:
        self.failures.append((operation, key, error))

    @property
    def operations(self) -> list[str]:
        return [op for op, _, _ in self.failures]

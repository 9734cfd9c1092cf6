"""User repository (primary store). Interface methods return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.user import UserRecord
from app.core.constants import USER_LOOKUP_FIELDS
from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.exceptions import StorageException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository

_UPDATABLE_COLUMNS = frozenset({"email", "hashed_password"})


def _user_to_record(u: User) -> UserRecord:
    """Map ORM User to application UserRecord."""
    return UserRecord(
        id=u.id,
        email=u.email,
        hashed_password=u.hashed_password,
        profile=dict(u.profile or {}),
        created_at=u.created_at,
        updated_at=u.updated_at,
    )


class UserRepository(BaseRepository[User]):
    """SQLAlchemy implementation of IUserRepository.

    Email uniqueness is enforced by the unique constraint on app_user.email;
    a violation surfaces as DuplicateResourceException.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, User)

    async def get_by_field(self, field: str, value: Any) -> UserRecord | None:
        if field not in USER_LOOKUP_FIELDS:
            raise ValueError(f"Unsupported lookup field for user: {field!r}")
        async with self._transaction("get_by_field") as session:
            user = await self._get_by(session, field, value)
            return _user_to_record(user) if user else None

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        return await self.get_by_field("id", user_id)

    async def create_user(
        self,
        email: str,
        hashed_password: str,
        profile: dict[str, Any],
    ) -> UserRecord:
        """Insert user; raise DuplicateResourceException on unique email violation."""
        user = User(email=email, hashed_password=hashed_password, profile=dict(profile))
        try:
            async with self._transaction("create_user") as session:
                session.add(user)
                await session.flush()
                await session.refresh(user)
                record = _user_to_record(user)
        except IntegrityError as e:
            raise DuplicateResourceException("user", "email", email) from e
        return record

    async def update_by_id(
        self, user_id: int, changes: dict[str, Any]
    ) -> UserRecord | None:
        """Apply changes under a row lock and return the committed post-update user."""
        unknown = set(changes) - _UPDATABLE_COLUMNS - {"profile"}
        if unknown:
            raise ValueError(f"Unsupported user update fields: {sorted(unknown)}")
        try:
            async with self._transaction("update_by_id") as session:
                result = await session.execute(
                    select(User).where(User.id == user_id).with_for_update()
                )
                user = result.scalar_one_or_none()
                if user is None:
                    return None
                for column in _UPDATABLE_COLUMNS & set(changes):
                    setattr(user, column, changes[column])
                if changes.get("profile"):
                    user.profile = {**(user.profile or {}), **changes["profile"]}
                await session.flush()
                await session.refresh(user)
                record = _user_to_record(user)
        except IntegrityError as e:
            if "email" in changes:
                raise DuplicateResourceException("user", "email", changes["email"]) from e
            raise StorageException("update_by_id", str(e)) from e
        return record

    async def delete_by_id(self, user_id: int) -> bool:
        async with self._transaction("delete_by_id") as session:
            result = await session.execute(delete(User).where(User.id == user_id))
            return (result.rowcount or 0) > 0

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserRecord]:
        async with self._transaction("list_users") as session:
            result = await session.execute(
                select(User)
                .order_by(User.created_at.desc(), User.id.desc())
                .offset(skip)
                .limit(limit)
            )
            return [_user_to_record(u) for u in result.scalars().all()]

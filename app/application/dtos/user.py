"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class UserRecord:
    """User read-model returned by the primary store and the user service.

    hashed_password is the one-way credential hash; plaintext passwords never
    reach this type. The API response model omits it.
    """

    id: int
    email: str
    hashed_password: str
    profile: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserCreate:
    """Input for UserService.create: email, raw password, opaque profile fields."""

    email: str
    password: str
    profile: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UserPatch:
    """Partial update. None means "leave unchanged"; profile keys merge into the existing profile."""

    email: str | None = None
    password: str | None = None
    profile: dict[str, Any] | None = None

    def is_empty(self) -> bool:
        return self.email is None and self.password is None and not self.profile

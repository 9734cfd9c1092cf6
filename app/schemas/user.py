"""User API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.application.dtos.user import UserRecord


class UserCreateRequest(BaseModel):
    """Request body for creating a user. Extra fields are stored as profile fields."""

    model_config = ConfigDict(extra="allow")

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=1024)

    def profile_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class UserUpdateRequest(BaseModel):
    """Request body for updating a user (partial). Extra fields merge into the profile."""

    model_config = ConfigDict(extra="allow")

    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=1, max_length=1024)

    def profile_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class UserResponse(BaseModel):
    """User response (no password hash)."""

    id: int
    email: str
    profile: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            profile=user.profile,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserDeleteResponse(BaseModel):
    """Response for DELETE /users/{id}."""

    deleted: bool

"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.user import (
    UserCreateRequest,
    UserDeleteResponse,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "UserCreateRequest",
    "UserDeleteResponse",
    "UserResponse",
    "UserUpdateRequest",
]

"""Application DTOs (no dependency on ORM or HTTP schemas)."""

from app.application.dtos.user import UserCreate, UserPatch, UserRecord

__all__ = ["UserCreate", "UserPatch", "UserRecord"]

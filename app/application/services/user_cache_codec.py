"""Cache payload codec for user records.

Explicit serialization boundary: exactly the UserRecord fields below are
written to the cache, as compact JSON with ISO-8601 datetimes. Nothing the
store driver attaches to its rows reaches the cache.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from app.application.dtos.user import UserRecord

CACHED_USER_FIELDS = (
    "id",
    "email",
    "hashed_password",
    "profile",
    "created_at",
    "updated_at",
)


def _dt_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dt_from_str(value: Any) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO datetime string, got {type(value).__name__}")
    return datetime.fromisoformat(value)


def user_to_cache(user: UserRecord) -> str:
    """Serialize a record for the cache. Raises TypeError if profile is not JSON-serializable."""
    payload = {
        "id": user.id,
        "email": user.email,
        "hashed_password": user.hashed_password,
        "profile": user.profile,
        "created_at": _dt_to_str(user.created_at),
        "updated_at": _dt_to_str(user.updated_at),
    }
    return json.dumps(payload, separators=(",", ":"), sort_keys=True)


def user_from_cache(raw: str | bytes) -> UserRecord:
    """Deserialize a cached record.

    Raises:
        ValueError: Payload is not valid JSON or does not have the cached record shape.
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Cached user payload must be a JSON object")
    missing = [f for f in CACHED_USER_FIELDS if f not in data]
    if missing:
        raise ValueError(f"Cached user payload missing fields: {missing}")
    user_id = data["id"]
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise ValueError("Cached user id must be an integer")
    if not isinstance(data["email"], str) or not isinstance(data["hashed_password"], str):
        raise ValueError("Cached user email and hashed_password must be strings")
    if not isinstance(data["profile"], dict):
        raise ValueError("Cached user profile must be an object")
    return UserRecord(
        id=user_id,
        email=data["email"],
        hashed_password=data["hashed_password"],
        profile=data["profile"],
        created_at=_dt_from_str(data["created_at"]),
        updated_at=_dt_from_str(data["updated_at"]),
    )

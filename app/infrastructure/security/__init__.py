"""Security: password hashing."""

from app.infrastructure.security.password import (
    PasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "PasswordHasher",
    "get_password_hash",
    "verify_password",
]

"""Cache key builders. Single place for key format (DRY).

The same builder is used on write, read, and invalidate so a record always
maps to one key.
"""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_USER


def user_key(user_id: int | str) -> str:
    """Cache key for user by ID (e.g. user:42)."""
    value = str(user_id)
    if not value or CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component 'user_id' must be non-empty and must not contain separator {CACHE_KEY_SEP!r}"
        )
    return f"{CACHE_PREFIX_USER}{CACHE_KEY_SEP}{value}"

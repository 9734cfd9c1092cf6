"""Infrastructure exceptions for the primary store and the cache.

Both extend UserServiceException so presentation can map them to HTTP
responses consistently. CacheDegradedError never reaches presentation:
the user service observes and swallows it.
"""

from app.domain.exceptions import UserServiceException


class StorageException(UserServiceException):
    """Primary store unreachable or rejected the operation."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Primary store operation failed: {operation}",
            "STORAGE_ERROR",
            {"operation": operation, "reason": reason},
        )


class CacheDegradedError(UserServiceException):
    """A cache operation failed (connection, timeout, or server error)."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(
            f"Cache {operation} failed for key {key}",
            "CACHE_DEGRADED",
            {"operation": operation, "key": key, "reason": reason},
        )

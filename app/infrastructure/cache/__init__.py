"""Cache: Redis service and cache key utilities.

Used by the user service as a best-effort read accelerator. Key format is
in app.core.cache_keys (DRY).
"""

from app.core.cache_keys import user_key
from app.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService", "user_key"]

"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
app.core.cache_keys and the user service.
"""

# Cache key prefixes (used with :id)
CACHE_PREFIX_USER = "user"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Default TTL (seconds) for cached user records
DEFAULT_CACHE_TTL_USERS = 900

# Primary store columns that may be used for single-record lookups
USER_LOOKUP_FIELDS = frozenset({"id", "email"})

"""Redis-based cache service for user records.

Provides async Redis get/set/delete on serialized text with TTL support.
Every failure (connection, timeout, server error) is raised as
CacheDegradedError after one reconnect attempt; callers decide how to
contain it. Key format lives in app.core.cache_keys.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import Settings, get_settings
from app.infrastructure.exceptions import CacheDegradedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache service with TTL support.

    Uses app.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown. One instance (and one
    connection pool) is shared by all requests.

    While Redis is unreachable, commands fail fast with CacheDegradedError
    and a reconnect is attempted at most once per
    cache_reconnect_interval_seconds, so the cache comes back on its own
    once Redis does.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. Treated as connected.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None
        # Monotonic time of the last connect attempt; None until connect() or after disconnect().
        self._last_connect_attempt: float | None = (
            time.monotonic() if redis_client is not None else None
        )

    def _build_client(self) -> redis.Redis:
        password = self.settings.redis_password
        return redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=self.settings.cache_timeout_seconds,
            socket_timeout=self.settings.cache_timeout_seconds,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup.

        A failed connection leaves the cache disabled; the app still starts
        and later commands retry the connection.
        """
        if self.redis is not None:
            return
        self._last_connect_attempt = time.monotonic()
        client = self._build_client()
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            await self._close_quietly(client)
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown; no reconnect follows."""
        self._last_connect_attempt = None
        self._connected = False
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis cache disconnected")

    @staticmethod
    async def _close_quietly(client: redis.Redis) -> None:
        try:
            await client.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing dropped Redis connection")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            await self._close_quietly(self.redis)
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def _reconnect_due(self) -> bool:
        if self._last_connect_attempt is None:
            return False
        elapsed = time.monotonic() - self._last_connect_attempt
        return elapsed >= self.settings.cache_reconnect_interval_seconds

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        operation: str,
        key: str,
        command: Callable[[redis.Redis], Awaitable[T]],
    ) -> T:
        """Run a Redis command; retry once after reconnect; raise CacheDegradedError on failure."""
        if not self.is_available():
            if not self._reconnect_due() or not await self._reconnect():
                raise CacheDegradedError(operation, key, "cache not connected")
        assert self.redis is not None
        try:
            return await command(self.redis)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect() and self.redis is not None:
                try:
                    return await command(self.redis)
                except redis.RedisError as retry_error:
                    raise CacheDegradedError(operation, key, str(retry_error)) from retry_error
            raise CacheDegradedError(operation, key, str(e)) from e
        except redis.RedisError as e:
            raise CacheDegradedError(operation, key, str(e)) from e

    async def get(self, key: str) -> str | None:
        """Return cached text or None on a miss.

        Args:
            key: Cache key (use app.core.cache_keys builders).

        Raises:
            CacheDegradedError: Redis unavailable or failed.
        """
        value: Any = await self._run("get", key, lambda r: r.get(key))
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store text, with TTL in seconds when given.

        Raises:
            CacheDegradedError: Redis unavailable or failed.
        """
        if ttl:
            await self._run("set", key, lambda r: r.setex(key, ttl, value))
        else:
            await self._run("set", key, lambda r: r.set(key, value))
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def delete(self, key: str) -> None:
        """Remove key from cache.

        Raises:
            CacheDegradedError: Redis unavailable or failed.
        """
        await self._run("delete", key, lambda r: r.delete(key))
        logger.debug("Cache DELETE: %s", key)

    async def ping(self) -> bool:
        """Return True if Redis answers PING (used by the health endpoint)."""
        try:
            return bool(await self._run("ping", "-", lambda r: r.ping()))
        except CacheDegradedError:
            return False

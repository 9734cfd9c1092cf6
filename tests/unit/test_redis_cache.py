"""CacheService unit tests with a mocked redis.asyncio client."""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from app.core.config import get_settings
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.exceptions import CacheDegradedError


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def cache_service(redis_client: AsyncMock) -> CacheService:
    return CacheService(redis_client=redis_client, settings=get_settings())


class TestCommands:
    async def test_get_hit_and_miss(self, cache_service, redis_client) -> None:
        redis_client.get = AsyncMock(side_effect=['{"id":1}', None])
        assert await cache_service.get("user:1") == '{"id":1}'
        assert await cache_service.get("user:2") is None

    async def test_get_decodes_bytes(self, cache_service, redis_client) -> None:
        redis_client.get = AsyncMock(return_value=b"payload")
        assert await cache_service.get("user:1") == "payload"

    async def test_set_with_ttl_uses_setex(self, cache_service, redis_client) -> None:
        await cache_service.set("user:1", "payload", ttl=900)
        redis_client.setex.assert_awaited_once_with("user:1", 900, "payload")

    async def test_set_without_ttl(self, cache_service, redis_client) -> None:
        await cache_service.set("user:1", "payload")
        redis_client.set.assert_awaited_once_with("user:1", "payload")

    async def test_delete(self, cache_service, redis_client) -> None:
        await cache_service.delete("user:1")
        redis_client.delete.assert_awaited_once_with("user:1")


class TestFailures:
    async def test_not_connected_raises(self) -> None:
        service = CacheService(settings=get_settings())
        assert not service.is_available()
        with pytest.raises(CacheDegradedError) as exc_info:
            await service.get("user:1")
        assert exc_info.value.details["reason"] == "cache not connected"

    async def test_redis_error_raises_cache_degraded(self, cache_service, redis_client) -> None:
        redis_client.setex = AsyncMock(side_effect=redis.ResponseError("OOM"))
        with pytest.raises(CacheDegradedError) as exc_info:
            await cache_service.set("user:1", "payload", ttl=60)
        assert exc_info.value.details["operation"] == "set"

    async def test_connection_error_with_failed_reconnect(
        self, cache_service, redis_client, monkeypatch
    ) -> None:
        redis_client.get = AsyncMock(side_effect=redis.ConnectionError("refused"))
        broken = AsyncMock()
        broken.ping = AsyncMock(side_effect=redis.ConnectionError("refused"))
        monkeypatch.setattr(cache_service, "_build_client", lambda: broken)
        with pytest.raises(CacheDegradedError):
            await cache_service.get("user:1")
        assert not cache_service.is_available()
        redis_client.aclose.assert_awaited_once()

    async def test_timeout_with_successful_reconnect(
        self, cache_service, redis_client, monkeypatch
    ) -> None:
        redis_client.get = AsyncMock(side_effect=redis.TimeoutError("slow"))
        fresh = AsyncMock()
        fresh.get = AsyncMock(return_value="payload")
        monkeypatch.setattr(cache_service, "_build_client", lambda: fresh)
        assert await cache_service.get("user:1") == "payload"
        assert cache_service.is_available()
        assert cache_service.redis is fresh

    async def test_ping_reports_false_when_down(self, cache_service, redis_client, monkeypatch) -> None:
        redis_client.ping = AsyncMock(side_effect=redis.ConnectionError("refused"))
        broken = AsyncMock()
        broken.ping = AsyncMock(side_effect=redis.ConnectionError("refused"))
        monkeypatch.setattr(cache_service, "_build_client", lambda: broken)
        assert await cache_service.ping() is False


class TestLifecycle:
    async def test_connect_failure_leaves_cache_disabled(self, monkeypatch) -> None:
        service = CacheService(settings=get_settings())
        broken = AsyncMock()
        broken.ping = AsyncMock(side_effect=redis.ConnectionError("refused"))
        monkeypatch.setattr(service, "_build_client", lambda: broken)
        await service.connect()
        assert not service.is_available()
        assert service.redis is None

    async def test_connect_and_disconnect(self, monkeypatch) -> None:
        service = CacheService(settings=get_settings())
        client = AsyncMock()
        monkeypatch.setattr(service, "_build_client", lambda: client)
        await service.connect()
        assert service.is_available()
        await service.disconnect()
        client.aclose.assert_awaited_once()
        assert not service.is_available()


def _settings(reconnect_interval: float):
    return get_settings().model_copy(
        update={"cache_reconnect_interval_seconds": reconnect_interval}
    )


def _client(ping_error: Exception | None = None, value: str | None = None) -> AsyncMock:
    client = AsyncMock()
    if ping_error is not None:
        client.ping = AsyncMock(side_effect=ping_error)
    client.get = AsyncMock(return_value=value)
    return client


class TestRecovery:
    async def test_recovers_after_outage_once_redis_is_back(
        self, redis_client, monkeypatch
    ) -> None:
        service = CacheService(redis_client=redis_client, settings=_settings(0))
        redis_client.get = AsyncMock(side_effect=redis.ConnectionError("refused"))
        monkeypatch.setattr(
            service, "_build_client", lambda: _client(redis.ConnectionError("still down"))
        )
        with pytest.raises(CacheDegradedError):
            await service.get("user:1")
        assert not service.is_available()

        healthy = _client(value="payload")
        monkeypatch.setattr(service, "_build_client", lambda: healthy)
        assert await service.get("user:1") == "payload"
        assert service.is_available()
        assert service.redis is healthy
        assert await service.ping() is True

    async def test_recovers_when_redis_was_down_at_startup(self, monkeypatch) -> None:
        service = CacheService(settings=_settings(0))
        monkeypatch.setattr(
            service, "_build_client", lambda: _client(redis.ConnectionError("refused"))
        )
        await service.connect()
        assert not service.is_available()

        monkeypatch.setattr(service, "_build_client", lambda: _client(value="payload"))
        assert await service.get("user:1") == "payload"
        assert service.is_available()

    async def test_reconnect_attempts_are_rate_limited(self, monkeypatch) -> None:
        service = CacheService(settings=_settings(60))
        built: list[AsyncMock] = []

        def build() -> AsyncMock:
            client = _client(redis.ConnectionError("refused"))
            built.append(client)
            return client

        monkeypatch.setattr(service, "_build_client", build)
        await service.connect()
        for _ in range(3):
            with pytest.raises(CacheDegradedError) as exc_info:
                await service.get("user:1")
            assert exc_info.value.details["reason"] == "cache not connected"
        assert len(built) == 1

    async def test_no_reconnect_after_disconnect(self, cache_service, monkeypatch) -> None:
        await cache_service.disconnect()
        monkeypatch.setattr(cache_service, "_build_client", lambda: _client(value="payload"))
        with pytest.raises(CacheDegradedError):
            await cache_service.get("user:1")
        assert not cache_service.is_available()

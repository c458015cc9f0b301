"""Tests for the Redis-backed cache wrapper."""

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from app.core import redis_lifecyle
from app.core.cache import RedisCache
from app.core.config import settings


@pytest.mark.asyncio
async def test_set_serialises_with_expiry():
    client = AsyncMock()
    cache = RedisCache(client)

    await cache.set("trips:id:1", {"destination": "Lisbon"}, expire=60)

    client.set.assert_awaited_once_with("trips:id:1", json.dumps({"destination": "Lisbon"}), ex=60)


@pytest.mark.asyncio
async def test_get_decodes_json():
    client = AsyncMock()
    client.get.return_value = '{"destination": "Lisbon"}'

    assert await RedisCache(client).get("trips:id:1") == {"destination": "Lisbon"}


@pytest.mark.asyncio
async def test_get_miss_returns_none():
    client = AsyncMock()
    client.get.return_value = None

    assert await RedisCache(client).get("trips:id:1") is None


@pytest.mark.asyncio
async def test_delete():
    client = AsyncMock()

    await RedisCache(client).delete("trips:id:1")

    client.delete.assert_awaited_once_with("trips:id:1")


def test_build_key():
    assert RedisCache.build_key("trips", "id", 42) == "trips:id:42"


@pytest.mark.asyncio
async def test_unreachable_redis_disables_cache(monkeypatch, caplog):
    client = AsyncMock()
    client.ping.side_effect = redis.ConnectionError("connection refused")
    monkeypatch.setattr(settings, "REDIS_URL", "redis://unreachable:6379/0")
    monkeypatch.setattr(redis_lifecyle.redis, "from_url", MagicMock(return_value=client))

    with caplog.at_level(logging.ERROR, logger="planner"):
        caches = [cache async for cache in redis_lifecyle.get_cache()]

    assert caches == [None]
    assert redis_lifecyle._redis_client is None
    assert "Could not connect to Redis server" in caplog.text

from unittest.mock import MagicMock

import redis

from src.api.cache.cache_manager import CacheManager
from src.api.cache.cache_provider import MemoryCacheProvider, RedisCacheProvider
from src.api.core.config import Settings


def test_memory_cache_set_get_and_expiry():
    clock = [0.0]
    cache = MemoryCacheProvider(expiry_seconds=60)
    cache._now = lambda: clock[0]
    cache.set("a", {"v": 1})
    cache.set("b", {"v": 2}, ttl=5)
    clock[0] = 4
    assert cache.get("b") == {"v": 2}
    clock[0] = 5
    assert cache.get("b") is None
    assert cache.exists("a")
    clock[0] = 60
    assert cache.get("a") is None
    assert cache.get_stats()["entries"] == 0


def test_memory_cache_sweeps_expired_keys_on_write():
    clock = [0.0]
    cache = MemoryCacheProvider(expiry_seconds=60, check_period=120)
    cache._now = lambda: clock[0]
    for i in range(1000):
        cache.set(f"nominatim:place-{i}:14.6:121.03", {"v": i})
    assert cache.get_stats()["entries"] == 1000
    # 清除週期未到，過期項目暫時保留
    clock[0] = 100
    cache.set("fresh", {"v": -1})
    assert cache.get_stats()["entries"] == 1001
    clock[0] = 10_000
    cache.set("latest", {"v": -2})
    assert cache.get_stats()["entries"] == 1
    assert cache.get("latest") == {"v": -2}


def test_memory_cache_delete_and_clear():
    cache = MemoryCacheProvider()
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a")
    assert not cache.delete("a")
    cache.clear()
    assert cache.get("b") is None
    assert not cache.is_degraded()


def test_memory_cache_last_write_wins():
    cache = MemoryCacheProvider()
    cache.set("k", "first")
    cache.set("k", "second")
    assert cache.get("k") == "second"


def test_redis_provider_serializes_json_with_ttl():
    client = MagicMock()
    client.get.return_value = '{"name": "San Juan"}'
    cache = RedisCacheProvider(client=client, expiry_seconds=60)
    assert cache.set("nominatim:San Juan:1.0:2.0", {"name": "San Juan"})
    key, ttl, payload = client.setex.call_args.args
    assert key.startswith("juanmap:")
    assert ttl == 60
    assert payload == '{"name": "San Juan"}'
    assert cache.get("nominatim:San Juan:1.0:2.0") == {"name": "San Juan"}


def test_redis_errors_are_cache_misses():
    client = MagicMock()
    client.get.side_effect = redis.ConnectionError("gone")
    client.setex.side_effect = redis.ConnectionError("gone")
    cache = RedisCacheProvider(client=client)
    assert cache.get("k") is None
    assert cache.set("k", {"v": 1}) is False


def test_cache_manager_defaults_to_memory():
    manager = CacheManager(Settings(cache_backend="memory"))
    assert isinstance(manager.backend, MemoryCacheProvider)
    assert not manager.is_degraded()
    manager.set("k", {"v": 1}, ttl=10)
    assert manager.get("k") == {"v": 1}


def test_cache_manager_degrades_when_redis_unavailable(monkeypatch):
    monkeypatch.setattr(
        "src.api.cache.cache_provider.redis.Redis",
        MagicMock(side_effect=redis.ConnectionError("refused")),
    )
    manager = CacheManager(Settings(cache_backend="redis", redis_port=1))
    assert isinstance(manager.backend, MemoryCacheProvider)
    assert manager.is_degraded()
    assert manager.get_stats()["degraded"] is True

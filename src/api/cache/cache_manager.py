from typing import Any, Dict, Optional

from src.api.core.config import Settings
from src.api.core.logger_config import get_logger
from src.common.interfaces import CacheInterface

from .cache_provider import MemoryCacheProvider, RedisCacheProvider

logger = get_logger(__name__)


class CacheManager(CacheInterface):
    """
    快取管理器

    依設定選擇快取後端並提供統一介面：
        - CACHE_BACKEND=redis 且連線成功：使用 Redis
        - CACHE_BACKEND=redis 但連線失敗：降級為記憶體快取，is_degraded() 回傳 True
        - 其他：記憶體快取
    """

    def __init__(self, settings: Settings, backend: Optional[CacheInterface] = None):
        self.degraded = False
        if backend is not None:
            self.backend = backend
            return

        ttl = settings.boundary_cache_ttl_seconds
        if settings.cache_backend == "redis":
            redis_backend = RedisCacheProvider(
                host=settings.redis_host,
                port=settings.redis_port,
                db=settings.redis_db,
                password=settings.redis_password,
                expiry_seconds=ttl,
            )
            if redis_backend.connected:
                self.backend = redis_backend
                logger.info("快取後端: Redis")
                return
            logger.warning("Redis 不可用，降級為記憶體快取")
            self.degraded = True
        self.backend = MemoryCacheProvider(expiry_seconds=ttl)

    def get(self, key: str) -> Any:
        return self.backend.get(key)

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        return self.backend.set(key, value, ttl=ttl)

    def exists(self, key: str) -> bool:
        return self.backend.exists(key)

    def delete(self, key: str) -> bool:
        return self.backend.delete(key)

    def clear(self) -> None:
        self.backend.clear()

    def is_degraded(self) -> bool:
        return self.degraded or self.backend.is_degraded()

    def get_stats(self) -> Dict[str, Any]:
        stats = dict(self.backend.get_stats())
        stats["degraded"] = self.is_degraded()
        return stats

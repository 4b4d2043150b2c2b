import hashlib
import json
import threading
import time
from typing import Any, Dict, Optional

import redis

from src.api.core.logger_config import get_logger
from src.common.interfaces import CacheInterface

logger = get_logger(__name__)


# 記憶體快取（單一程序、開發與測試用）
class MemoryCacheProvider(CacheInterface):
    """
    提供本地記憶體快取功能，適用於單機部署、測試或 Redis 斷線時。
    過期項目在讀取時移除，寫入時每 check_period 秒整批清除一次；
    同鍵併發寫入以最後一次為準。
    """

    def __init__(self, expiry_seconds: int = 60, check_period: int = 120):
        # _store maps key -> (value, stored_at, ttl_seconds_or_None)
        self._store: Dict[str, tuple] = {}
        self._lock = threading.Lock()
        self._last_sweep: Optional[float] = None
        self.expiry_seconds = expiry_seconds
        self.check_period = check_period
        self.hits = 0
        self.misses = 0

    def _now(self) -> float:
        return time.monotonic()

    def _expired(self, entry: tuple, now: float) -> bool:
        _, stored_at, ttl = entry
        ttl = ttl if ttl is not None else self.expiry_seconds
        return now - stored_at >= ttl

    def _lookup(self, key):
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._expired(entry, self._now()):
                del self._store[key]
                return None
            return entry

    def _sweep(self, now: float) -> None:
        expired = [k for k, entry in self._store.items() if self._expired(entry, now)]
        for key in expired:
            del self._store[key]
        self._last_sweep = now
        if expired:
            logger.debug(f"記憶體快取清除 {len(expired)} 個過期項目")

    def get(self, key: str) -> Any:
        entry = self._lookup(key)
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        return entry[0]

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        now = self._now()
        with self._lock:
            if self._last_sweep is None or now - self._last_sweep >= self.check_period:
                self._sweep(now)
            self._store[key] = (value, now, ttl)
        return True

    def exists(self, key: str) -> bool:
        return self._lookup(key) is not None

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def is_degraded(self) -> bool:
        return False

    def get_stats(self) -> Dict[str, Any]:
        return {
            "backend": "memory",
            "entries": len(self._store),
            "hits": self.hits,
            "misses": self.misses,
            "default_ttl": self.expiry_seconds,
        }


class RedisCacheProvider(CacheInterface):
    """
    Redis 快取，值以 JSON 序列化後以 SETEX 寫入。
    Redis 失敗時記錄錯誤並視為快取未命中，不影響請求結果。
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        expiry_seconds: int = 60,
        prefix: str = "juanmap:",
        client: Optional[redis.Redis] = None,
    ):
        """
        初始化 RedisCacheProvider，設定連線參數、快取前綴與過期時間。
        連線失敗時 logger 會記錄警告，self.redis 維持 None。
        """
        self.expiry_seconds = expiry_seconds
        self.prefix = prefix
        self.host = host
        self.port = port

        if client is not None:
            self.redis = client
            return

        self.redis = None
        try:
            self.redis = redis.Redis(
                host=host,
                port=port,
                db=db,
                password=password,
                decode_responses=True,
            )
            self.redis.ping()
            logger.debug("*** Redis Connected ***")
        except redis.RedisError as e:
            logger.warning(f"Redis 連接失敗: {str(e)}")
            self.redis = None

    @property
    def connected(self) -> bool:
        return self.redis is not None

    def _generate_key(self, key: str) -> str:
        """
        以 MD5 雜湊產生固定長度的鍵值並加上前綴，
        查詢字串可能含空白或非 ASCII 字元。
        """
        return f"{self.prefix}{hashlib.md5(key.encode()).hexdigest()}"

    def get(self, key: str) -> Any:
        if not self.redis:
            return None
        try:
            data = self.redis.get(self._generate_key(key))
            if not data:
                return None
            return json.loads(data)
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Redis 獲取快取失敗: {str(e)}")
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not self.redis:
            return False
        try:
            expire = ttl if ttl is not None else self.expiry_seconds
            self.redis.setex(
                self._generate_key(key), expire, json.dumps(value, ensure_ascii=False)
            )
            logger.debug(f"已成功設置快取，鍵值: {key}")
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Redis 設置快取失敗: {str(e)}")
            return False

    def exists(self, key: str) -> bool:
        if not self.redis:
            return False
        try:
            return bool(self.redis.exists(self._generate_key(key)))
        except redis.RedisError as e:
            logger.error(f"Redis 檢查鍵存在失敗: {str(e)}")
            return False

    def delete(self, key: str) -> bool:
        if not self.redis:
            return False
        try:
            return bool(self.redis.delete(self._generate_key(key)))
        except redis.RedisError as e:
            logger.error(f"Redis 刪除鍵失敗: {str(e)}")
            return False

    def clear(self) -> None:
        """清除所有帶有本服務前綴的快取鍵"""
        if not self.redis:
            return
        try:
            keys = list(self.redis.scan_iter(f"{self.prefix}*"))
            if keys:
                self.redis.delete(*keys)
        except redis.RedisError as e:
            logger.error(f"Redis 清除快取失敗: {str(e)}")

    def is_degraded(self) -> bool:
        return self.redis is None

    def get_stats(self) -> Dict[str, Any]:
        return {
            "backend": "redis",
            "host": self.host,
            "port": self.port,
            "connected": self.connected,
            "default_ttl": self.expiry_seconds,
        }

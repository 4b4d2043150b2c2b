"""
API 快取系統模組 (API Cache System)

- cache_manager.py: 快取管理器，依設定選擇 Redis 或記憶體後端並處理降級
- cache_provider.py: 記憶體與 Redis 快取提供者實作

快取僅用於加速重複的邊界查詢，正確性不依賴快取存在與否。
"""

from .cache_manager import CacheManager
from .cache_provider import MemoryCacheProvider, RedisCacheProvider

__all__ = [
    "CacheManager",
    "MemoryCacheProvider",
    "RedisCacheProvider",
]

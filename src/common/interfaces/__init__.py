"""
快取系統介面定義

核心元件透過此介面取得快取能力，由呼叫端在建構時注入，
測試時可替換為空實作或固定結果的替身。所有實作都應該實現這個介面。
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class CacheInterface(ABC):
    """
    快取系統抽象介面

    定義了快取系統的基本操作，包括：
    - 資料存取 (get/set)
    - 存在性檢查 (exists)
    - 資料刪除 (delete)
    - 系統清理 (clear)
    - 狀態檢查 (is_degraded)
    - 統計資訊 (get_stats)
    """

    @abstractmethod
    def get(self, key: str) -> Any:
        """
        從快取中取得資料

        Args:
            key: 快取鍵值

        Returns:
            對應的快取內容，若不存在或已過期則回傳 None
        """

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        將資料存入快取

        Args:
            key: 快取鍵值
            value: 欲儲存的內容，需可 JSON 序列化
            ttl: 存活時間（秒），None 時使用實作的預設值

        Returns:
            bool: 是否成功存入
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """檢查快取是否存在且未過期"""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """從快取中刪除資料"""

    @abstractmethod
    def clear(self) -> None:
        """清除所有快取內容"""

    @abstractmethod
    def is_degraded(self) -> bool:
        """
        檢查快取系統是否處於降級狀態

        Returns:
            bool: 要求的後端不可用、改以備援運作時為 True
        """

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """取得快取系統統計資訊"""

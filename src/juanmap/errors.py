"""
JuanMap 核心錯誤分類

所有錯誤對目前請求皆為終止性錯誤，核心不做任何重試：
- ValidationError: 輸入格式錯誤或缺漏，不會觸及網路
- NotFoundError: 請求格式正確，但沒有可用結果
- UpstreamError: 外部服務無法連線、回傳非成功狀態或回應格式錯誤
- RequestCancelledError: 呼叫端已中斷請求，外部服務呼叫隨之停止
"""

from typing import Optional


class JuanMapError(Exception):
    """JuanMap 核心錯誤基底類別"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JuanMapError):
    """輸入驗證失敗"""


class PolylineDecodeError(ValidationError):
    """編碼折線在可變長度整數中途被截斷"""


class NotFoundError(JuanMapError):
    """查無可用結果"""


class UpstreamError(JuanMapError):
    """
    外部服務錯誤

    Attributes:
        status: 服務商回報的狀態碼（如 "ZERO_RESULTS"、"HTTP_503"）
        reachable: 服務商是否有正常回應；False 代表連線失敗或 HTTP 非 2xx
    """

    def __init__(
        self, message: str, status: Optional[str] = None, reachable: bool = True
    ):
        super().__init__(message)
        self.status = status
        self.reachable = reachable

    def __str__(self) -> str:
        if self.status:
            return f"{self.status}: {self.message}"
        return self.message


class RequestCancelledError(JuanMapError):
    """呼叫端已中斷連線，進行中的外部服務呼叫被取消"""

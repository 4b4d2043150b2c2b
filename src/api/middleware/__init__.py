"""
API 中間件模組 (API Middleware)

- request_logging.py: 請求日誌中間件，記錄方法、路徑、狀態碼與耗時
"""

from .request_logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
]

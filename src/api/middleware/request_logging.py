import time

from src.api.core.logger_config import get_logger

logger = get_logger("juanmap.access")

# 不需要記錄的端點
EXCLUDED_PREFIXES = ("/docs", "/openapi.json", "/redoc", "/favicon.ico")


class RequestLoggingMiddleware:
    """ASGI 中間件 - 記錄每個請求的方法、路徑、狀態碼與耗時"""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or scope["path"].startswith(EXCLUDED_PREFIXES):
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope["method"]
        path = scope["path"]
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(f"{method} {path} {status_code} {duration_ms:.1f}ms")

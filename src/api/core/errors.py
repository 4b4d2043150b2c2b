"""
核心錯誤 → HTTP 回應對應

- ValidationError / 請求解析錯誤 → 400
- NotFoundError → 404
- UpstreamError → 502（服務商無法連線或 HTTP 非 2xx）或 422（服務商回報失敗）
- RequestCancelledError → 499（呼叫端已中斷，回應不會送達，僅供日誌記錄）
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.core.logger_config import get_logger
from src.juanmap.errors import (
    NotFoundError,
    RequestCancelledError,
    UpstreamError,
    ValidationError,
)

CLIENT_CLOSED_REQUEST = 499

logger = get_logger(__name__)


def error_body(message: str, status: str = None) -> dict:
    body = {"success": False, "message": message}
    if status:
        body["status"] = status
    return body


def upstream_status_code(exc: UpstreamError) -> int:
    return 502 if not exc.reachable else 422


async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"請求驗證失敗 {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content=error_body(exc.message))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in errors
    )
    logger.warning(f"請求格式錯誤 {request.url.path}: {message}")
    return JSONResponse(
        status_code=400, content=error_body(message or "Invalid request")
    )


async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content=error_body(exc.message))


async def upstream_error_handler(request: Request, exc: UpstreamError):
    code = upstream_status_code(exc)
    logger.error(f"外部服務錯誤 {request.url.path}: {exc} -> HTTP {code}")
    return JSONResponse(status_code=code, content=error_body(exc.message, exc.status))


async def request_cancelled_handler(request: Request, exc: RequestCancelledError):
    return JSONResponse(
        status_code=CLIENT_CLOSED_REQUEST, content=error_body(exc.message)
    )

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(RequestCancelledError, request_cancelled_handler)

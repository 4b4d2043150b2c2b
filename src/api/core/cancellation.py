"""
請求中斷偵測

核心元件為同步程式，於執行緒池內執行；事件迴圈這端定期檢查呼叫端是否已斷線，
斷線時設定取消事件，讓外部服務客戶端關閉進行中的呼叫，並立即結束此請求。
"""

import asyncio
import threading
from typing import Any, Callable, TypeVar

from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from src.api.core.logger_config import get_logger
from src.juanmap.errors import RequestCancelledError
from src.juanmap.providers.cancellation import cancel_scope

logger = get_logger(__name__)

T = TypeVar("T")

DISCONNECT_POLL_SECONDS = 0.1


def _call_with_cancel(event: threading.Event, func: Callable[..., T], *args) -> T:
    with cancel_scope(event):
        return func(*args)


def _discard_result(task: "asyncio.Future[Any]") -> None:
    # 已放棄的工作仍會在執行緒內結束，取走例外避免 asyncio 警告
    if not task.cancelled():
        task.exception()


async def run_until_disconnected(
    request: Request, func: Callable[..., T], *args: Any
) -> T:
    """
    在執行緒池執行 func(*args)，呼叫端斷線時取消外部服務呼叫。

    Raises:
        RequestCancelledError: 呼叫端在結果產生前中斷連線
    """
    event = threading.Event()
    task = asyncio.ensure_future(
        run_in_threadpool(_call_with_cancel, event, func, *args)
    )
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info(f"呼叫端已中斷連線，取消外部服務呼叫: {request.url.path}")
                raise RequestCancelledError("Client closed request")
    finally:
        if not task.done():
            event.set()
            task.add_done_callback(_discard_result)

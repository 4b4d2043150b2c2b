"""
外部服務呼叫的取消訊號

API 層為每個請求建立一個 threading.Event，於工作執行緒內以 cancel_scope() 綁定；
呼叫端中斷連線時設定該事件，客戶端在連線前與讀取回應的每個區塊之間檢查，
並立即關閉進行中的回應。核心元件不需要知道取消訊號的存在。
"""

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from src.juanmap.errors import RequestCancelledError

_cancel_event: ContextVar[Optional[threading.Event]] = ContextVar(
    "provider_cancel_event", default=None
)


@contextmanager
def cancel_scope(event: threading.Event) -> Iterator[threading.Event]:
    """在目前執行緒的 context 內綁定取消事件"""
    token = _cancel_event.set(event)
    try:
        yield event
    finally:
        _cancel_event.reset(token)


def is_cancelled() -> bool:
    event = _cancel_event.get()
    return event is not None and event.is_set()


def raise_if_cancelled(name: str) -> None:
    if is_cancelled():
        raise RequestCancelledError(f"{name} 呼叫已因請求中斷而取消")

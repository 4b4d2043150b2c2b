import json
from typing import Any, Dict, Optional

import requests

from src.api.core.logger_config import get_logger
from src.juanmap.errors import UpstreamError
from src.juanmap.providers.cancellation import raise_if_cancelled
from src.juanmap.providers.rate_limit import TokenBucket

logger = get_logger(__name__)

# 讀取回應時每個區塊的大小，也是檢查取消訊號的間隔
CHUNK_SIZE = 16 * 1024


class ProviderClient:
    """
    外部 HTTP 服務共用基底

    負責逾時、速率限制與傳輸層錯誤轉換，子類別只處理各家服務的參數與回應格式。
    所有失敗皆轉為 UpstreamError，不做重試。
    回應以串流方式分塊讀取，請求被取消時在下一個區塊前關閉連線。
    """

    name = "provider"

    def __init__(
        self,
        timeout: float = 10,
        rate_limiter: Optional[TokenBucket] = None,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.rate_limiter = rate_limiter
        self.session = session or requests.Session()

    def _get_json(
        self,
        url: str,
        params: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        raise_if_cancelled(self.name)
        if self.rate_limiter is not None and not self.rate_limiter.consume():
            logger.warning(f"{self.name} 速率限制觸發 - 當前請求被拒絕")
            raise UpstreamError(
                f"{self.name} 請求過於頻繁，請稍後再試",
                status="OVER_QUERY_LIMIT",
                reachable=False,
            )

        try:
            resp = self.session.get(
                url, params=params, headers=headers, timeout=self.timeout, stream=True
            )
            try:
                resp.raise_for_status()
                body = self._read_body(resp)
            finally:
                resp.close()
        except requests.exceptions.Timeout as e:
            logger.error(f"{self.name} 請求超時 ({self.timeout}秒)")
            raise UpstreamError(
                f"{self.name} 請求超時", status="TIMEOUT", reachable=False
            ) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"網路連線錯誤 - 無法連接 {self.name}")
            raise UpstreamError(
                f"無法連接 {self.name}", status="UNREACHABLE", reachable=False
            ) from e
        except requests.exceptions.HTTPError as e:
            code = e.response.status_code if e.response is not None else 0
            logger.error(f"{self.name} HTTP 錯誤狀態碼: {code}")
            raise UpstreamError(
                f"{self.name} {code}", status=f"HTTP_{code}", reachable=False
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{self.name} 請求失敗: {type(e).__name__}: {e}")
            raise UpstreamError(
                f"{self.name} 請求失敗", status="REQUEST_FAILED", reachable=False
            ) from e

        try:
            return json.loads(body)
        except ValueError as e:
            logger.error(f"{self.name} 回應不是合法的 JSON")
            raise UpstreamError(
                f"{self.name} 回應格式錯誤", status="INVALID_RESPONSE"
            ) from e

    def _read_body(self, resp: requests.Response) -> bytes:
        chunks = []
        for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
            raise_if_cancelled(self.name)
            chunks.append(chunk)
        return b"".join(chunks)

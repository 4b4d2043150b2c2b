from typing import Any, Dict, List, Optional

import requests

from src.api.core.logger_config import get_logger
from src.juanmap.errors import UpstreamError
from src.juanmap.providers.base import ProviderClient
from src.juanmap.providers.rate_limit import TokenBucket

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = "JuanMap/1.0 (support@yourdomain.com)"


class NominatimClient(ProviderClient):
    """
    OpenStreetMap Nominatim 搜尋服務

    以自由文字查詢地點，並要求回應內嵌 polygon GeoJSON。
    Nominatim 使用政策要求帶有可識別的 User-Agent。
    """

    name = "Nominatim"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10,
        rate_limiter: Optional[TokenBucket] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(timeout=timeout, rate_limiter=rate_limiter, session=session)
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    def search(self, query: str) -> List[Dict[str, Any]]:
        """
        查詢地點候選列表。

        Returns:
            List[dict]: 每筆含 name、display_name、boundingbox、geojson

        Raises:
            UpstreamError: 無法連線、HTTP 非 2xx 或回應不是列表
        """
        logger.info(f"進行 Nominatim 查詢: {query}")
        data = self._get_json(
            f"{self.base_url}/search",
            params={"format": "jsonv2", "polygon_geojson": 1, "q": query},
            headers={"Accept": "application/json", "User-Agent": self.user_agent},
        )
        if data is None:
            return []
        if not isinstance(data, list):
            raise UpstreamError("Nominatim 回應格式錯誤", status="INVALID_RESPONSE")
        return data

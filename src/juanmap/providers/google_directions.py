from typing import Any, Dict, Optional

import requests

from src.api.core.logger_config import get_logger
from src.juanmap.errors import UpstreamError
from src.juanmap.models import Coordinate, TravelMode
from src.juanmap.providers.base import ProviderClient
from src.juanmap.providers.rate_limit import TokenBucket

logger = get_logger(__name__)

DEFAULT_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"


def format_coordinate(point: Coordinate) -> str:
    """Directions API 的座標格式為 'lat,lng'"""
    return f"{point.lat},{point.lng}"


class GoogleDirectionsClient(ProviderClient):
    """
    Google Directions API

    只要求單一路線（alternatives=false）；回應中的 status 由呼叫端判斷。
    """

    name = "Google Directions"

    def __init__(
        self,
        api_key: Optional[str],
        url: str = DEFAULT_DIRECTIONS_URL,
        timeout: float = 10,
        rate_limiter: Optional[TokenBucket] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(timeout=timeout, rate_limiter=rate_limiter, session=session)
        self.api_key = api_key
        self.url = url

    def directions(
        self, origin: Coordinate, destination: Coordinate, mode: TravelMode
    ) -> Dict[str, Any]:
        """
        查詢起訖點之間的路線，回傳 Directions API 原始 JSON。

        Raises:
            UpstreamError: 未設定 API Key、無法連線或回應格式錯誤
        """
        if not self.api_key:
            logger.error("GOOGLE_API_KEY 環境變數未設定 - 無法查詢路線")
            raise UpstreamError(
                "GOOGLE_API_KEY 未設定", status="REQUEST_DENIED", reachable=False
            )

        logger.info(
            f"進行路線查詢: {format_coordinate(origin)} -> "
            f"{format_coordinate(destination)} ({mode.value})"
        )
        data = self._get_json(
            self.url,
            params={
                "origin": format_coordinate(origin),
                "destination": format_coordinate(destination),
                "mode": mode.value,
                "alternatives": "false",
                "key": self.api_key,
            },
        )
        if not isinstance(data, dict):
            raise UpstreamError(
                "Google Directions 回應格式錯誤", status="INVALID_RESPONSE"
            )
        return data

"""
行政邊界查詢 (BoundaryResolver)

流程：
    1. 以自由文字向地理編碼服務查詢，要求內嵌 polygon 幾何
    2. 只保留 Polygon / MultiPolygon 候選，沒有則 NotFoundError
    3. 以提示座標對每個候選的邊界框計分，取最小者（同分保留服務商順序）
    4. 轉換勝出幾何為所有環與外環
    5. 成功結果寫入注入的快取，相同鍵在 TTL 內直接回傳
"""

from typing import Any, Dict, List, Optional, Protocol

from src.api.core.logger_config import get_logger
from src.common.interfaces import CacheInterface
from src.juanmap.errors import NotFoundError, UpstreamError, ValidationError
from src.juanmap.geo.geometry import (
    geojson_to_rings,
    has_polygon,
    outer_rings,
    pick_best_candidate,
)
from src.juanmap.models import BoundaryResult, Coordinate

logger = get_logger(__name__)

CACHE_KEY_PRECISION = 6


class Geocoder(Protocol):
    def search(self, query: str) -> List[Dict[str, Any]]: ...


class BoundaryResolver:
    """
    依地名與提示座標找出最符合的行政邊界。

    Args:
        geocoder: 地理編碼服務（需提供 search(query)）
        cache: 選用的快取；None 時每次都查詢服務商
        ttl: 快取存活秒數
        fallback_hint: 未提供提示座標時用於快取鍵的固定座標
    """

    def __init__(
        self,
        geocoder: Geocoder,
        cache: Optional[CacheInterface] = None,
        ttl: int = 60,
        fallback_hint: Optional[Coordinate] = None,
    ):
        self.geocoder = geocoder
        self.cache = cache
        self.ttl = ttl
        self.fallback_hint = fallback_hint or Coordinate(
            lat=14.603179674407787, lng=121.03603853653271
        )

    def cache_key(self, query: str, hint: Optional[Coordinate]) -> str:
        point = hint or self.fallback_hint
        lat = round(point.lat, CACHE_KEY_PRECISION)
        lng = round(point.lng, CACHE_KEY_PRECISION)
        return f"nominatim:{query}:{lat}:{lng}"

    def resolve(self, query: str, hint: Optional[Coordinate] = None) -> BoundaryResult:
        """
        查詢行政邊界。

        Raises:
            ValidationError: query 為空白
            UpstreamError: 服務商無法連線、非成功狀態或幾何格式錯誤
            NotFoundError: 沒有任何候選帶有 polygon 幾何
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("q is required")

        key = self.cache_key(query, hint)
        hit = self._cache_get(key)
        if hit is not None:
            logger.info(f"邊界快取命中: {key}")
            return BoundaryResult.model_validate(hit)

        candidates = [c for c in self.geocoder.search(query) if has_polygon(c)]
        if not candidates:
            logger.warning(f"查無 polygon 邊界: {query}")
            raise NotFoundError("No polygon found")

        best = pick_best_candidate(candidates, hint)
        result = self._build_result(best, query)
        logger.info(
            f"邊界查詢成功: {query} -> {result.display_name} "
            f"({len(result.outer_rings)} 個外環)"
        )

        self._cache_set(key, result.model_dump(by_alias=True))
        return result

    def _build_result(self, candidate: Dict[str, Any], query: str) -> BoundaryResult:
        geojson = candidate["geojson"]
        try:
            all_rings = geojson_to_rings(geojson)
            outers = outer_rings(geojson)
        except (TypeError, ValueError) as e:
            raise UpstreamError(
                f"邊界幾何格式錯誤: {e}", status="INVALID_RESPONSE"
            ) from e

        bbox = candidate.get("boundingbox")
        return BoundaryResult(
            name=candidate.get("name") or query,
            display_name=candidate.get("display_name") or query,
            bounding_box=[str(v) for v in bbox] if isinstance(bbox, list) else None,
            all_rings=all_rings,
            outer_rings=outers,
        )

    def _cache_get(self, key: str) -> Optional[Dict[str, Any]]:
        if self.cache is None:
            return None
        return self.cache.get(key)

    def _cache_set(self, key: str, value: Dict[str, Any]) -> None:
        if self.cache is None:
            return
        if not self.cache.set(key, value, ttl=self.ttl):
            logger.warning(f"邊界快取寫入失敗: {key}")

"""
GeoJSON 幾何轉換與候選結果計分

Nominatim 的座標為 [lng, lat]，轉換時一律調換為 {lat, lng}，
順序錯誤會讓整個幾何圖形鏡像翻轉。
"""

import math
from typing import Any, Dict, List, Optional, Sequence

from src.juanmap.models import BoundingBox, Coordinate, Ring

POLYGON = "Polygon"
MULTI_POLYGON = "MultiPolygon"
POLYGON_TYPES = (POLYGON, MULTI_POLYGON)


def _to_ring(raw_ring: Sequence[Sequence[float]]) -> Ring:
    return [Coordinate(lat=lat, lng=lng) for lng, lat, *_ in raw_ring]


def has_polygon(candidate: Dict[str, Any]) -> bool:
    """候選結果是否帶有 Polygon 或 MultiPolygon 幾何"""
    geojson = candidate.get("geojson") if isinstance(candidate, dict) else None
    return isinstance(geojson, dict) and geojson.get("type") in POLYGON_TYPES


def geojson_to_rings(geojson: Optional[Dict[str, Any]]) -> List[Ring]:
    """
    將 GeoJSON 轉為環列表。

    Polygon 的 coordinates 本身即為環列表；MultiPolygon 則攤平一層，
    依多邊形順序串接所有環。其他型別回傳空列表。
    """
    if not geojson:
        return []
    coordinates = geojson.get("coordinates") or []
    if geojson.get("type") == POLYGON:
        return [_to_ring(ring) for ring in coordinates]
    if geojson.get("type") == MULTI_POLYGON:
        return [_to_ring(ring) for polygon in coordinates for ring in polygon]
    return []


def outer_rings(geojson: Optional[Dict[str, Any]]) -> List[Ring]:
    """
    取出每個多邊形的外環（第一個環）。

    MultiPolygon 必須從未攤平的多邊形結構取值，攤平後無法分辨哪些是內洞。
    外環數量必定等於多邊形數量（Polygon 為 1），任何多邊形缺少外環即為 ValueError。
    """
    if not geojson:
        return []
    coordinates = geojson.get("coordinates") or []
    if geojson.get("type") == POLYGON:
        return [_outer_ring(coordinates)]
    if geojson.get("type") == MULTI_POLYGON:
        if not coordinates:
            raise ValueError("MultiPolygon 沒有任何多邊形")
        return [_outer_ring(polygon) for polygon in coordinates]
    return []


def _outer_ring(polygon: Sequence[Any]) -> Ring:
    if not polygon or not polygon[0]:
        raise ValueError("多邊形缺少外環")
    return _to_ring(polygon[0])


def parse_bounding_box(raw: Any) -> Optional[BoundingBox]:
    """
    解析 Nominatim 的 boundingbox 欄位（4 個字串，[south, north, west, east]）。
    格式不符時回傳 None。
    """
    if not isinstance(raw, (list, tuple)) or len(raw) != 4:
        return None
    try:
        south, north, west, east = (float(value) for value in raw)
    except (TypeError, ValueError):
        return None
    if any(math.isnan(value) for value in (south, north, west, east)):
        return None
    return BoundingBox(south=south, north=north, west=west, east=east)


def score_candidate(candidate: Dict[str, Any], hint: Optional[Coordinate]) -> float:
    """
    計算候選結果與提示座標的距離分數，越小越好。

    - 邊界框缺漏或格式錯誤：+inf，排在最後
    - 沒有提示座標：0，以服務商原始順序為準
    - 提示座標落在邊界框內：0
    - 其他：提示座標到邊界框中心的歐氏距離（以度為單位）
    """
    bbox = parse_bounding_box(candidate.get("boundingbox"))
    if bbox is None:
        return math.inf
    if hint is None:
        return 0.0
    if bbox.contains(hint):
        return 0.0
    center = bbox.center()
    return math.hypot(hint.lng - center.lng, hint.lat - center.lat)


def pick_best_candidate(
    candidates: List[Dict[str, Any]], hint: Optional[Coordinate]
) -> Optional[Dict[str, Any]]:
    """
    依分數挑出最佳候選；同分時保留服務商原始順序（穩定排序）。
    多個邊界框同時包含提示座標時視為平手，不再比較框的大小。
    """
    if not candidates:
        return None
    return min(candidates, key=lambda candidate: score_candidate(candidate, hint))

"""
Google Encoded Polyline 編解碼

格式說明：每個座標以與前一點的差值記錄，乘上 1e5 後取整數，
再以 zig-zag 折疊正負號、每 5 bits 一組並以 0x20 作為延續位元，
最後加上 63 轉為可列印 ASCII 字元。

解碼時的位元運算依 32 位元有號整數語意進行（與瀏覽器端 JavaScript 實作一致），
因此在異常輸入下的結果可與前端保持相同。
"""

import math
from typing import Iterable, List, Tuple

from pydantic import ValidationError as ModelValidationError

from src.juanmap.errors import PolylineDecodeError
from src.juanmap.models import Coordinate

PRECISION = 1e5

_INT32_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def _decode_delta(points: str, index: int) -> Tuple[int, int]:
    """
    從 index 開始解出一個有號差值。

    Returns:
        (差值, 下一個游標位置)

    Raises:
        PolylineDecodeError: 字串在延續位元仍為 1 時結束
    """
    result = 0
    shift = 0
    while True:
        if index >= len(points):
            raise PolylineDecodeError(f"編碼折線在位置 {index} 被截斷")
        b = ord(points[index]) - 63
        index += 1
        result = _to_int32(result | ((b & 0x1F) << (shift & 31)))
        shift += 5
        if not b & 0x20:
            break
    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index


def decode(points) -> List[Coordinate]:
    """
    將編碼折線解碼為座標序列。

    空字串或非字串輸入回傳空序列；截斷的字串或解出超出經緯度範圍的座標
    則拋出 PolylineDecodeError。

    Args:
        points: 編碼折線字串

    Returns:
        List[Coordinate]: 依序排列的座標
    """
    if not isinstance(points, str) or not points:
        return []

    coordinates: List[Coordinate] = []
    index = 0
    lat = 0
    lng = 0
    while index < len(points):
        dlat, index = _decode_delta(points, index)
        lat += dlat
        dlng, index = _decode_delta(points, index)
        lng += dlng
        try:
            coordinates.append(Coordinate(lat=lat / PRECISION, lng=lng / PRECISION))
        except ModelValidationError as e:
            raise PolylineDecodeError(
                f"編碼折線第 {len(coordinates)} 點超出經緯度範圍"
            ) from e
    return coordinates


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def _round(value: float) -> int:
    # 與 JavaScript Math.round 相同，.5 一律往正無限大進位
    return int(math.floor(value * PRECISION + 0.5))


def encode(coordinates: Iterable[Coordinate]) -> str:
    """
    將座標序列編碼為 Google Encoded Polyline。
    """
    output = []
    prev_lat = 0
    prev_lng = 0
    for point in coordinates:
        lat = _round(point.lat)
        lng = _round(point.lng)
        output.append(_encode_value(lat - prev_lat))
        output.append(_encode_value(lng - prev_lng))
        prev_lat, prev_lng = lat, lng
    return "".join(output)

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# region: 共用設定


class CamelModel(BaseModel):
    """對外序列化一律使用 camelCase 欄位名稱"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# endregion

# region: 座標與幾何


class Coordinate(CamelModel):
    """
    WGS84 經緯度座標。
    """

    lat: float = Field(..., ge=-90, le=90)  # 緯度
    lng: float = Field(..., ge=-180, le=180)  # 經度


# 環：有序座標序列，首尾不強制相同
Ring = List[Coordinate]


class BoundingBox(CamelModel):
    """
    邊界框，對應 Nominatim 的 [south, north, west, east]。
    """

    south: float
    north: float
    west: float
    east: float

    def contains(self, point: Coordinate) -> bool:
        return (
            self.south <= point.lat <= self.north
            and self.west <= point.lng <= self.east
        )

    def center(self) -> Coordinate:
        return Coordinate(
            lat=(self.south + self.north) / 2, lng=(self.west + self.east) / 2
        )


class BoundaryResult(CamelModel):
    """
    行政邊界查詢結果。

    all_rings 為所有環（外環與內洞），outer_rings 僅含每個多邊形的第一個環。
    bounding_box 保留服務商的原始字串 [south, north, west, east]。
    """

    name: str
    display_name: str
    bounding_box: Optional[List[str]] = None
    all_rings: List[Ring]
    outer_rings: List[Ring]


# endregion

# region: 路線


class TravelMode(str, Enum):
    """Directions API 支援的交通方式"""

    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


class RouteStep(CamelModel):
    """
    路線中的單一步驟。
    """

    polyline: List[Coordinate]  # 解碼後的步驟折線
    distance_meters: int = 0  # 距離（公尺）
    distance_text: str = ""  # 距離文字（如 "1.2 km"）
    instruction_plain_text: str = ""  # 移除 HTML 後的導航指示


class RouteResult(CamelModel):
    """
    路線查詢結果，所有文字欄位缺值時為空字串而非 null。
    """

    overview_path: List[Coordinate]
    steps: List[RouteStep]
    total_distance_text: str = ""
    duration_text: str = ""
    arrival_time_text: str = ""


# endregion

"""
JuanMap - 地圖前端的後端聚合服務核心

將外部地理編碼與路線服務的回應轉換為地圖前端可直接使用的資料：
- boundary: 行政邊界查詢與最佳候選挑選 (BoundaryResolver)
- routing: 路線查詢與折線解碼 (RouteDecoder)
- geo/: 幾何工具 (polyline 編解碼、GeoJSON 轉換、指示文字清理)
- providers/: 外部服務客戶端 (Nominatim、Google Directions)

核心元件皆為請求範圍、無共享可變狀態，快取由呼叫端注入。
"""

__version__ = "1.0.0"

from .boundary import BoundaryResolver
from .errors import JuanMapError, NotFoundError, UpstreamError, ValidationError
from .routing import RouteDecoder

__all__ = [
    "__version__",
    "BoundaryResolver",
    "RouteDecoder",
    "JuanMapError",
    "ValidationError",
    "NotFoundError",
    "UpstreamError",
]

"""
外部服務客戶端模組 (Provider Clients)

- nominatim: OpenStreetMap Nominatim 地點搜尋（含 polygon GeoJSON）
- google_directions: Google Directions API 路線查詢
- rate_limit: Token Bucket 速率限制器
- cancellation: 呼叫端中斷時的取消訊號（cancel_scope / raise_if_cancelled）
"""

from .google_directions import GoogleDirectionsClient
from .nominatim import NominatimClient
from .rate_limit import TokenBucket

__all__ = ["GoogleDirectionsClient", "NominatimClient", "TokenBucket"]

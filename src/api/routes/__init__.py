"""
API 路由模組 (API Routes)

- map_routes.py: 地圖相關端點
  * GET  /api/google-map/boundary - 行政邊界查詢
  * POST /api/google-map/route - 起訖點路線查詢
"""

from .map_routes import router

__all__ = [
    "router",
]

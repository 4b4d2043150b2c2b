"""
幾何工具模組 (Geometry Helpers)

- polyline: Google Encoded Polyline 編解碼
- geometry: GeoJSON 轉換、邊界框計分與最佳候選挑選
- instructions: 導航指示文字清理
"""

from . import polyline
from .geometry import geojson_to_rings, outer_rings, pick_best_candidate
from .instructions import strip_html_instructions

__all__ = [
    "polyline",
    "geojson_to_rings",
    "outer_rings",
    "pick_best_candidate",
    "strip_html_instructions",
]

"""
地圖相關路由器模組

- GET  /api/google-map/boundary: 行政邊界查詢
- POST /api/google-map/route: 起訖點路線查詢

核心元件於執行緒池執行，外部服務呼叫只會阻塞該請求本身；
呼叫端中斷連線時，進行中的外部服務呼叫隨之取消。
核心錯誤由 src.api.core.errors 的例外處理器轉為 HTTP 回應。
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from src.api.core.cancellation import run_until_disconnected
from src.api.core.config import Settings, get_settings
from src.api.core.dependencies import get_boundary_resolver, get_route_decoder
from src.api.core.logger_config import get_logger
from src.api.core.models import (
    BoundaryResponse,
    ErrorResponse,
    RouteRequest,
    RouteResponse,
)
from src.juanmap.boundary import BoundaryResolver
from src.juanmap.errors import ValidationError
from src.juanmap.models import Coordinate
from src.juanmap.routing import RouteDecoder

logger = get_logger(__name__)
router = APIRouter(prefix="/api/google-map", tags=["Google Map"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "輸入格式錯誤"},
    404: {"model": ErrorResponse, "description": "查無結果"},
    422: {"model": ErrorResponse, "description": "外部服務回報失敗"},
    502: {"model": ErrorResponse, "description": "外部服務無法連線"},
}


def parse_hint(lat: Optional[float], lng: Optional[float]) -> Optional[Coordinate]:
    """
    組合提示座標；兩者皆未提供時回傳 None，只提供其一或超出範圍則為 ValidationError。
    """
    if lat is None and lng is None:
        return None
    if lat is None or lng is None:
        raise ValidationError("hintLat and hintLng must be supplied together")
    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise ValidationError("hint coordinate is out of range")
    return Coordinate(lat=lat, lng=lng)


@router.get(
    "/boundary",
    response_model=BoundaryResponse,
    responses=ERROR_RESPONSES,
    summary="行政邊界查詢",
)
async def get_geo_boundary(
    request: Request,
    q: Optional[str] = Query(None, description="地名，例如 San Juan City"),
    hint_lat: Optional[float] = Query(None, alias="hintLat", description="提示緯度"),
    hint_lng: Optional[float] = Query(None, alias="hintLng", description="提示經度"),
    settings: Settings = Depends(get_settings),
    resolver: BoundaryResolver = Depends(get_boundary_resolver),
) -> BoundaryResponse:
    """
    依地名查詢行政邊界，回傳所有環與外環座標。
    提供提示座標時，優先選擇邊界框包含該點的候選，其次為中心最近者。
    """
    query = settings.default_boundary_query if q is None else q
    hint = parse_hint(hint_lat, hint_lng)
    result = await run_until_disconnected(request, resolver.resolve, query, hint)
    return BoundaryResponse(data=result)


@router.post(
    "/route",
    response_model=RouteResponse,
    responses=ERROR_RESPONSES,
    summary="路線查詢",
)
async def post_route(
    request: Request,
    body: RouteRequest,
    decoder: RouteDecoder = Depends(get_route_decoder),
) -> RouteResponse:
    """
    查詢起訖點之間的單一路線，回傳解碼後的總覽路徑、各步驟折線與純文字指示。
    """
    result = await run_until_disconnected(
        request, decoder.route, body.origin, body.destination, body.mode
    )
    return RouteResponse(data=result)

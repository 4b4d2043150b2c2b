"""
API 請求/回應模型定義
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from src.juanmap.models import BoundaryResult, RouteResult


class RouteRequest(BaseModel):
    """
    路線查詢請求。

    端點座標保留原始 JSON 物件，由 RouteDecoder 驗證，
    格式錯誤時回傳 400 而非框架預設的 422。
    """

    origin: Optional[Dict[str, Any]] = Field(None, description="起點 {lat, lng}")
    destination: Optional[Dict[str, Any]] = Field(None, description="終點 {lat, lng}")
    mode: Optional[str] = Field(
        "driving", description="交通方式 driving/walking/bicycling/transit"
    )


class BoundaryResponse(BaseModel):
    """邊界查詢回應"""

    success: bool = True
    data: BoundaryResult


class RouteResponse(BaseModel):
    """路線查詢回應"""

    success: bool = True
    data: RouteResult


class ErrorResponse(BaseModel):
    """錯誤回應"""

    success: bool = False
    message: str
    status: Optional[str] = Field(None, description="外部服務回報的狀態碼")


class HealthResponse(BaseModel):
    """健康檢查回應"""

    success: bool = True
    status: str = "OK"
    version: str
    timestamp: str
    degraded: bool = False

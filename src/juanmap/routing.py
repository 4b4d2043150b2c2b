"""
路線解碼 (RouteDecoder)

向 Directions 服務查詢單一路線，解碼總覽折線與各步驟折線，
並將 HTML 導航指示轉為純文字。任何一步失敗都讓整個請求失敗，不回傳部分結果。
"""

import math
from typing import Any, Dict, Mapping, Protocol, Union

from src.api.core.logger_config import get_logger
from src.juanmap.errors import PolylineDecodeError, UpstreamError, ValidationError
from src.juanmap.geo import polyline
from src.juanmap.geo.instructions import strip_html_instructions
from src.juanmap.models import Coordinate, RouteResult, RouteStep, TravelMode

logger = get_logger(__name__)

CoordinateInput = Union[Coordinate, Mapping[str, Any], None]


class DirectionsProvider(Protocol):
    def directions(
        self, origin: Coordinate, destination: Coordinate, mode: TravelMode
    ) -> Dict[str, Any]: ...


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def parse_coordinate(value: CoordinateInput, label: str) -> Coordinate:
    """
    驗證並轉換端點座標，lat 與 lng 都必須是數字且在合法範圍內。

    Raises:
        ValidationError: 缺漏、非數字或超出範圍
    """
    if isinstance(value, Coordinate):
        return value
    if not isinstance(value, Mapping):
        raise ValidationError(f"{label} must be an object with numeric lat and lng")
    lat = value.get("lat")
    lng = value.get("lng")
    if not _is_number(lat) or not _is_number(lng):
        raise ValidationError(f"{label}.lat and {label}.lng must be numbers")
    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise ValidationError(f"{label} is out of range")
    return Coordinate(lat=lat, lng=lng)


def parse_mode(mode: Union[TravelMode, str, None]) -> TravelMode:
    if mode is None or mode == "":
        return TravelMode.DRIVING
    if isinstance(mode, TravelMode):
        return mode
    try:
        return TravelMode(str(mode).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in TravelMode)
        raise ValidationError(f"mode must be one of: {allowed}") from None


def _text(section: Any) -> str:
    if isinstance(section, dict):
        text = section.get("text")
        return text if isinstance(text, str) else ""
    return ""


def _section(value: Any, label: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        logger.error(f"Directions 回應格式錯誤: {label} 不是物件")
        raise UpstreamError(f"{label} 格式錯誤", status="INVALID_RESPONSE")
    return value


def _points(section: Any) -> Any:
    if isinstance(section, dict):
        return section.get("points")
    return None


class RouteDecoder:
    """
    起訖點路線查詢與解碼。

    Args:
        provider: Directions 服務（需提供 directions(origin, destination, mode)）
    """

    def __init__(self, provider: DirectionsProvider):
        self.provider = provider

    def route(
        self,
        origin: CoordinateInput,
        destination: CoordinateInput,
        mode: Union[TravelMode, str, None] = TravelMode.DRIVING,
    ) -> RouteResult:
        """
        查詢並解碼路線。

        Raises:
            ValidationError: 端點缺漏或非數字、mode 不支援；此時不會呼叫服務商
            UpstreamError: 服務商狀態非 OK、沒有路線或回應格式錯誤
        """
        origin_point = parse_coordinate(origin, "origin")
        destination_point = parse_coordinate(destination, "destination")
        travel_mode = parse_mode(mode)

        data = self.provider.directions(origin_point, destination_point, travel_mode)
        data = _section(data, "directions response")
        status = data.get("status")
        routes = data.get("routes") or []
        if not isinstance(routes, list):
            raise UpstreamError("路線 routes 格式錯誤", status="INVALID_RESPONSE")
        if status != "OK" or not routes:
            message = data.get("error_message") or "No route found"
            logger.warning(f"路線查詢失敗: {status} - {message}")
            raise UpstreamError(message, status=status or "UNKNOWN", reachable=True)

        route = _section(routes[0], "route")
        legs = route.get("legs")
        if not isinstance(legs, list) or not legs:
            raise UpstreamError("路線缺少 legs", status="INVALID_RESPONSE")
        leg = _section(legs[0], "leg")
        raw_steps = leg.get("steps") or []
        if not isinstance(raw_steps, list):
            raise UpstreamError("路線 steps 格式錯誤", status="INVALID_RESPONSE")

        try:
            overview_path = polyline.decode(_points(route.get("overview_polyline")))
            steps = [self._build_step(_section(step, "step")) for step in raw_steps]
        except PolylineDecodeError as e:
            logger.error(f"路線折線解碼失敗: {e.message}")
            raise UpstreamError(e.message, status="INVALID_POLYLINE") from e

        result = RouteResult(
            overview_path=overview_path,
            steps=steps,
            total_distance_text=_text(leg.get("distance")),
            duration_text=_text(leg.get("duration")),
            arrival_time_text=_text(leg.get("arrival_time")),
        )
        logger.info(
            f"路線查詢成功: {len(steps)} 個步驟, {result.total_distance_text}, "
            f"{result.duration_text}"
        )
        return result

    @staticmethod
    def _build_step(step: Dict[str, Any]) -> RouteStep:
        distance = step.get("distance") or {}
        value = distance.get("value") if isinstance(distance, dict) else None
        return RouteStep(
            polyline=polyline.decode(_points(step.get("polyline"))),
            distance_meters=int(value) if _is_number(value) else 0,
            distance_text=_text(distance),
            instruction_plain_text=strip_html_instructions(
                step.get("html_instructions")
            ),
        )

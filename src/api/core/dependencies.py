"""
FastAPI 依賴注入

快取與外部服務客戶端在程序內各建立一次；核心元件每次請求重新組裝，
本身不持有跨請求狀態。測試可透過 app.dependency_overrides 替換任一層。
"""

from functools import lru_cache

from fastapi import Depends

from src.api.cache.cache_manager import CacheManager
from src.api.core.config import Settings, get_settings
from src.juanmap.boundary import BoundaryResolver
from src.juanmap.models import Coordinate
from src.juanmap.providers import GoogleDirectionsClient, NominatimClient, TokenBucket
from src.juanmap.routing import RouteDecoder


@lru_cache
def get_cache() -> CacheManager:
    """獲取快取管理器實例（單例）"""
    return CacheManager(get_settings())


def _rate_limiter(settings: Settings) -> TokenBucket:
    return TokenBucket(
        rate=settings.provider_rate_per_second, burst=settings.provider_burst
    )


@lru_cache
def get_geocoder() -> NominatimClient:
    settings = get_settings()
    return NominatimClient(
        base_url=settings.nominatim_base_url,
        user_agent=settings.nominatim_user_agent,
        timeout=settings.provider_timeout_seconds,
        rate_limiter=_rate_limiter(settings),
    )


@lru_cache
def get_directions_client() -> GoogleDirectionsClient:
    settings = get_settings()
    return GoogleDirectionsClient(
        api_key=settings.google_api_key,
        url=settings.google_directions_url,
        timeout=settings.provider_timeout_seconds,
        rate_limiter=_rate_limiter(settings),
    )


def get_boundary_resolver(
    settings: Settings = Depends(get_settings),
    geocoder: NominatimClient = Depends(get_geocoder),
    cache: CacheManager = Depends(get_cache),
) -> BoundaryResolver:
    return BoundaryResolver(
        geocoder,
        cache=cache,
        ttl=settings.boundary_cache_ttl_seconds,
        fallback_hint=Coordinate(
            lat=settings.default_hint_lat, lng=settings.default_hint_lng
        ),
    )


def get_route_decoder(
    provider: GoogleDirectionsClient = Depends(get_directions_client),
) -> RouteDecoder:
    return RouteDecoder(provider)

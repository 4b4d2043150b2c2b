"""
環境變數設定

啟動時以 python-dotenv 載入 .env，之後一律透過 get_settings() 取得單一設定實例。
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

from src.juanmap.providers.google_directions import DEFAULT_DIRECTIONS_URL
from src.juanmap.providers.nominatim import DEFAULT_BASE_URL, DEFAULT_USER_AGENT

load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


@dataclass
class Settings:
    """服務設定，欄位對應同名（大寫）環境變數"""

    # 外部服務
    google_api_key: Optional[str] = None
    nominatim_base_url: str = DEFAULT_BASE_URL
    nominatim_user_agent: str = DEFAULT_USER_AGENT
    google_directions_url: str = DEFAULT_DIRECTIONS_URL
    provider_timeout_seconds: float = 10.0
    provider_rate_per_second: float = 5.0
    provider_burst: int = 10

    # 邊界查詢
    boundary_cache_ttl_seconds: int = 60
    default_boundary_query: str = "San Juan City"
    default_hint_lat: float = 14.603179674407787
    default_hint_lng: float = 121.03603853653271

    # 快取
    cache_backend: str = "memory"  # memory | redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None

    # 伺服器
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
        return cls(
            google_api_key=os.getenv("GOOGLE_API_KEY") or None,
            nominatim_base_url=os.getenv("NOMINATIM_BASE_URL", DEFAULT_BASE_URL),
            nominatim_user_agent=os.getenv("NOMINATIM_USER_AGENT", DEFAULT_USER_AGENT),
            google_directions_url=os.getenv(
                "GOOGLE_DIRECTIONS_URL", DEFAULT_DIRECTIONS_URL
            ),
            provider_timeout_seconds=_env_float("PROVIDER_TIMEOUT_SECONDS", 10.0),
            provider_rate_per_second=_env_float("PROVIDER_RATE_PER_SECOND", 5.0),
            provider_burst=_env_int("PROVIDER_BURST", 10),
            boundary_cache_ttl_seconds=_env_int("BOUNDARY_CACHE_TTL_SECONDS", 60),
            default_boundary_query=os.getenv("DEFAULT_BOUNDARY_QUERY", "San Juan City"),
            default_hint_lat=_env_float("DEFAULT_HINT_LAT", 14.603179674407787),
            default_hint_lng=_env_float("DEFAULT_HINT_LNG", 121.03603853653271),
            cache_backend=os.getenv("CACHE_BACKEND", "memory").lower(),
            redis_host=os.getenv("REDIS_HOST", "localhost"),
            redis_port=_env_int("REDIS_PORT", 6379),
            redis_db=_env_int("REDIS_DB", 0),
            redis_password=os.getenv("REDIS_PASSWORD") or None,
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=_env_int("API_PORT", 3000),
            cors_allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


@lru_cache
def get_settings() -> Settings:
    """單例模式回傳 Settings"""
    return Settings.from_env()

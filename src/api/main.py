"""
JuanMap API 主應用程式模組

地圖前端的後端聚合服務，提供行政邊界查詢與路線查詢的 HTTP API。

主要功能:
    - GET  /api/google-map/boundary: 行政邊界（Nominatim polygon）
    - POST /api/google-map/route: 路線（Google Directions，折線已解碼）
    - GET  /health: 健康檢查

啟動方式:
    uvicorn src.api.main:app --host 0.0.0.0 --port 3000
"""

import time
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.core.config import Settings, get_settings
from src.api.core.dependencies import get_cache
from src.api.core.errors import register_error_handlers
from src.api.core.logger_config import get_logger
from src.api.core.models import HealthResponse
from src.api.middleware import RequestLoggingMiddleware
from src.api.routes import router as map_router
from src.common.interfaces import CacheInterface
from src.juanmap import __version__

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """建立並設定 FastAPI 應用程式"""
    settings = settings or get_settings()

    app = FastAPI(
        title="JuanMap API",
        description="地圖前端的後端聚合服務 - 行政邊界與路線查詢",
        version=__version__,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # 設定 CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # 註冊路由器
    app.include_router(map_router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check(
        cache: CacheInterface = Depends(get_cache),
    ) -> HealthResponse:
        """
        系統健康檢查端點

        Returns:
            HealthResponse:
                - status: 服務狀態
                - version: 應用程式版本號
                - timestamp: 伺服器當前時間
                - degraded: 快取是否處於降級模式（如 Redis 不可用）
        """
        return HealthResponse(
            version=app.version,
            timestamp=time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
            degraded=cache.is_degraded(),
        )

    logger.info(
        f"[OpenAPI] Swagger UI: http://{settings.api_host}:{settings.api_port}/docs"
    )
    return app


app = create_app()

"""
Estimator FastAPI 서버

엔드포인트:
- GET / - 서비스 정보
- GET /api/health - 헬스체크
- POST /api/estimate - 프로젝트 비용 견적
- POST /api/subscribe - 이메일 수집
- /api/blog/... - 블로그 (공개 / 관리자)
- /api/blog/ai/... - 블로그 AI (관리자)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import ConfigurationError, Settings, get_settings, validate_settings
from src.core.errors import register_exception_handlers
from src.core.log import setup_logging
from src.api.auth import attach_session_cookie
from src.api.routes import blog, blog_ai, estimate, health

logger = logging.getLogger("estimator.api")

SERVICE_NAME = "Estimator API"
VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """앱 생성 (테스트에서는 settings 주입)"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 시작/종료 이벤트"""
        # 설정 오류면 시작 실패
        validate_settings(settings)
        logger.info(f"🚀 {SERVICE_NAME} starting on port {settings.port}")
        logger.info(f"📡 OpenAI API Key status: {'✅ Configured' if settings.openai_api_key else '❌ Missing'}")
        logger.info(f"📡 Gemini API Key status: {'✅ Configured' if settings.gemini_api_key else '❌ Missing'}")
        yield
        logger.info(f"{SERVICE_NAME} shutting down...")

    app = FastAPI(
        title=SERVICE_NAME,
        description="프로젝트 견적, 이메일 수집, 블로그 관리/AI 보조 API",
        version=VERSION,
        lifespan=lifespan
    )

    # CORS 설정
    app.add_middleware(CORSMiddleware, **settings.cors_options())

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """요청 로깅"""
        logger.info(f"{request.method} {request.url.path}")
        logger.debug("Request headers:", extra={"data": {
            k: v for k, v in request.headers.items() if k.lower() not in ("authorization", "cookie")
        }})
        response = await call_next(request)
        return attach_session_cookie(request, response)

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(estimate.router, prefix="/api", tags=["Estimate"])
    app.include_router(blog_ai.router, prefix="/api/blog/ai", tags=["Blog AI"])
    app.include_router(blog.router, prefix="/api/blog", tags=["Blog"])

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running",
            "environment": settings.project_env,
        }

    return app


def main() -> None:
    """프로세스 진입점 (설정 검증 실패 시 종료 코드 1)"""
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        validate_settings(settings)
    except ConfigurationError as e:
        logger.error("Configuration error:", extra={"data": e})
        sys.exit(1)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn src.api.main:app
app = create_app()


if __name__ == "__main__":
    main()

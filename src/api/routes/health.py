"""
헬스체크 API

엔드포인트:
- GET /api/health - OpenAI 연결 확인
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.dependencies import get_chat_client
from src.core.config import Settings, get_settings
from src.shared.openai_client import OpenAIAPIError, OpenAIClient

logger = logging.getLogger("estimator.api.health")
router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


@router.get("/health")
async def health_check(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: OpenAIClient = Depends(get_chat_client),
):
    """
    헬스체크

    OpenAI 모델 목록 호출로 API 키와 연결 상태를 확인합니다.
    """
    logger.info("Health check requested", extra={"data": {"origin": request.headers.get("origin")}})

    if not settings.openai_api_key:
        logger.error("OpenAI API key is missing")
        return _error(503, "OpenAI API key not configured")

    try:
        models = await client.list_models()
    except OpenAIAPIError as e:
        logger.error("Health check error:", extra={"data": e})
        return _error(503, f"OpenAI API connection failed: {e.message}")
    except Exception as e:
        logger.error("Health check error:", extra={"data": e})
        return _error(500, str(e) or "Server error during health check")

    if not models:
        logger.error("OpenAI model listing returned no models")
        return _error(503, "OpenAI API connection failed: no models available")

    return {
        "status": "ok",
        "message": "Server is healthy",
        "openaiConfigured": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

"""
견적 / 이메일 수집 API

엔드포인트:
- POST /api/estimate - 프로젝트 비용 견적
- POST /api/subscribe - 이메일 수집
"""

import logging
from typing import Optional, List

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel, ConfigDict, Field

from src.api.dependencies import get_estimator, get_store
from src.core.errors import ApiError
from src.estimation import CostEstimator
from src.shared.models import EmailCapture, EstimationRequest
from src.shared.openai_client import OpenAIAPIError
from src.shared.supabase_client import SupabaseClient

logger = logging.getLogger("estimator.api.estimate")
router = APIRouter()

REQUIRED_ESTIMATE_FIELDS = ["projectName", "description", "timeline", "projectType"]


# ========== 요청 모델 ==========

class EstimateBody(BaseModel):
    """견적 요청"""
    model_config = ConfigDict(populate_by_name=True)

    project_name: Optional[str] = Field(None, alias="projectName")
    description: Optional[str] = None
    timeline: Optional[str] = None
    selected_features: Optional[List[str]] = Field(None, alias="selectedFeatures")
    project_type: Optional[str] = Field(None, alias="projectType")
    complexity: Optional[int] = Field(None, ge=0, le=100, description="복잡도 (%)")
    email: Optional[str] = None


class SubscribeBody(BaseModel):
    """이메일 수집 요청"""
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    project_name: Optional[str] = Field(None, alias="projectName")
    project_type: Optional[str] = Field(None, alias="projectType")
    selected_features: Optional[List[str]] = Field(None, alias="selectedFeatures")
    complexity: Optional[int] = Field(None, ge=0, le=100)


def is_plausible_email(email: Optional[str]) -> bool:
    return bool(email) and "@" in email


# ========== 백그라운드 작업 ==========

def capture_email(store: SupabaseClient, entry: EmailCapture) -> None:
    """견적 요청자의 이메일 저장 (응답과 분리, 결과는 로그로만)"""
    try:
        result = store.save_email(entry)
    except Exception as e:
        logger.error("Email capture failed:", extra={"data": e})
        return

    if result.ok:
        logger.info(f"Email captured for project: {entry.project_name}")
    else:
        logger.warning(f"Email capture skipped ({result.status.value}): {result.error}")


def _provider_error(error: OpenAIAPIError) -> ApiError:
    """OpenAI 에러 → HTTP 상태"""
    if error.category == "bad_request":
        return ApiError(400, error.message)
    if error.category == "rate_limit":
        return ApiError(429, "Rate limit exceeded. Please try again later.")
    if error.category == "authentication":
        return ApiError(401, "OpenAI API authentication failed")
    status = error.status if 400 <= error.status <= 599 else 500
    return ApiError(status, error.message or "OpenAI API Error")


# ========== 엔드포인트 ==========

@router.post("/estimate")
async def create_estimate(
    body: EstimateBody,
    background_tasks: BackgroundTasks,
    estimator: CostEstimator = Depends(get_estimator),
    store: SupabaseClient = Depends(get_store),
):
    """
    프로젝트 비용 견적

    이메일이 있으면 응답 후 백그라운드로 저장합니다.
    """
    logger.info("Received estimation request")

    values = {
        "projectName": body.project_name,
        "description": body.description,
        "timeline": body.timeline,
        "projectType": body.project_type,
    }
    missing = [name for name in REQUIRED_ESTIMATE_FIELDS if not (values[name] or "").strip()]
    if missing:
        raise ApiError(
            400,
            "Missing required fields",
            required=REQUIRED_ESTIMATE_FIELDS,
            missing=missing,
        )

    request = EstimationRequest(
        project_name=body.project_name,
        description=body.description,
        timeline=body.timeline,
        project_type=body.project_type,
        selected_features=body.selected_features or [],
        complexity=body.complexity,
        email=body.email,
    )

    logger.info("Processing request for:", extra={"data": {
        "projectName": request.project_name,
        "projectType": request.project_type,
        "timeline": request.timeline,
        "complexity": request.complexity,
        "features": len(request.selected_features),
    }})

    try:
        estimation = await estimator.estimate(request)
    except OpenAIAPIError as e:
        logger.error("Error processing estimation:", extra={"data": e})
        raise _provider_error(e)
    except Exception as e:
        logger.error("Error processing estimation:", extra={"data": e})
        raise ApiError(500, "Failed to generate estimation", message=str(e) or "Unknown error")

    if request.email:
        if is_plausible_email(request.email):
            background_tasks.add_task(
                capture_email,
                store,
                EmailCapture(
                    email=request.email,
                    project_name=request.project_name,
                    project_type=request.project_type,
                    features=request.selected_features,
                    complexity=request.complexity,
                    estimation=estimation,
                ),
            )
        else:
            logger.warning("Ignoring malformed email on estimation request")

    return {"estimation": estimation}


@router.post("/subscribe")
def subscribe(body: SubscribeBody, store: SupabaseClient = Depends(get_store)):
    """이메일 수집"""
    if not is_plausible_email(body.email):
        raise ApiError(400, "A valid email address is required", success=False, required=["email"])

    result = store.save_email(EmailCapture(
        email=body.email.strip(),
        project_name=body.project_name,
        project_type=body.project_type,
        features=body.selected_features or [],
        complexity=body.complexity,
    ))

    if not result.ok:
        raise ApiError(500, "Failed to save email", success=False, message=result.error or "Unknown error")

    return {"success": True, "message": "Email saved successfully"}

"""
블로그 AI API (관리자 전용)

엔드포인트:
- POST /api/blog/ai/generate - 주제로 포스트 생성
- POST /api/blog/ai/improve - 본문 개선
- POST /api/blog/ai/title - 제목 생성
- POST /api/blog/ai/excerpt - 요약 생성
- POST /api/blog/ai/tags - 태그 생성
- POST /api/blog/ai/translate - 번역 (en / pl)
"""

import logging
from typing import Optional, List, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from src.api.auth import check_admin_access
from src.api.dependencies import get_blog_assistant
from src.content.blog_assistant import BlogAssistant
from src.content.prompts import LANGUAGE_NAMES
from src.core.errors import ApiError
from src.shared.models import BlogGenerationRequest, BlogLanguage, BlogLength, BlogTone

logger = logging.getLogger("estimator.api.blog_ai")
router = APIRouter(dependencies=[Depends(check_admin_access)])

CONFIG_HINT = "Please check your Gemini API configuration."


# ========== 요청 모델 ==========

class GenerateRequest(BaseModel):
    """포스트 생성 요청"""
    topic: Optional[str] = None
    keywords: Optional[Union[List[str], str]] = None
    language: Optional[str] = None
    tone: Optional[str] = None
    length: Optional[str] = None


class ContentRequest(BaseModel):
    """본문 기반 요청"""
    content: Optional[str] = None
    improvements: Optional[List[str]] = None


class TranslateRequest(BaseModel):
    """번역 요청"""
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = None
    target_language: Optional[str] = Field(None, alias="targetLanguage")


def _require_content(request: ContentRequest) -> str:
    if not request.content:
        raise ApiError(400, "Content is required", success=False, required=["content"])
    return request.content


def _unavailable(action: str) -> ApiError:
    return ApiError(500, f"Failed to {action}. {CONFIG_HINT}", success=False)


def _option(enum_cls, value: Optional[str], default, field: str):
    """빈 값이면 기본값, 지원하지 않는 값이면 400"""
    if not value:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise ApiError(
            400,
            f"Unsupported {field}: {value}",
            success=False,
            supported=[member.value for member in enum_cls],
        )


def _split_keywords(keywords: Optional[Union[List[str], str]]) -> List[str]:
    if not keywords:
        return []
    if isinstance(keywords, str):
        keywords = keywords.split(",")
    return [k.strip() for k in keywords if k and k.strip()]


# ========== 엔드포인트 ==========

@router.post("/generate")
async def generate_post(
    request: GenerateRequest,
    assistant: BlogAssistant = Depends(get_blog_assistant),
):
    """주제로 블로그 포스트 생성"""
    if not request.topic:
        raise ApiError(400, "Topic is required", success=False, required=["topic"])

    logger.info(f"Admin generating blog post for topic: {request.topic}")

    post = await assistant.generate_post(BlogGenerationRequest(
        topic=request.topic,
        keywords=_split_keywords(request.keywords),
        language=_option(BlogLanguage, request.language, BlogLanguage.EN, "language"),
        tone=_option(BlogTone, request.tone, BlogTone.PROFESSIONAL, "tone"),
        length=_option(BlogLength, request.length, BlogLength.MEDIUM, "length"),
    ))
    if post is None:
        raise _unavailable("generate blog post")

    return {
        "success": True,
        "data": post.to_dict(),
        "message": "Blog post generated successfully",
    }


@router.post("/improve")
async def improve_content(
    request: ContentRequest,
    assistant: BlogAssistant = Depends(get_blog_assistant),
):
    """본문 개선"""
    content = _require_content(request)
    logger.info("Admin improving blog content with AI")

    improved = await assistant.improve_content(content, request.improvements)
    if not improved:
        raise _unavailable("improve content")

    return {
        "success": True,
        "data": {"original": content, "improved": improved},
        "message": "Content improved successfully",
    }


@router.post("/title")
async def generate_title(
    request: ContentRequest,
    assistant: BlogAssistant = Depends(get_blog_assistant),
):
    """제목 생성"""
    content = _require_content(request)
    logger.info("Admin generating title with AI")

    title = await assistant.generate_title(content)
    if not title:
        raise _unavailable("generate title")

    return {
        "success": True,
        "data": {"title": title},
        "message": "Title generated successfully",
    }


@router.post("/excerpt")
async def generate_excerpt(
    request: ContentRequest,
    assistant: BlogAssistant = Depends(get_blog_assistant),
):
    """요약 생성"""
    content = _require_content(request)
    logger.info("Admin generating excerpt with AI")

    excerpt = await assistant.generate_excerpt(content)
    if not excerpt:
        raise _unavailable("generate excerpt")

    return {
        "success": True,
        "data": {"excerpt": excerpt},
        "message": "Excerpt generated successfully",
    }


@router.post("/tags")
async def generate_tags(
    request: ContentRequest,
    assistant: BlogAssistant = Depends(get_blog_assistant),
):
    """태그 생성 (실패 시 빈 목록)"""
    content = _require_content(request)
    logger.info("Admin generating tags with AI")

    tags = await assistant.generate_tags(content)
    return {
        "success": True,
        "data": {"tags": tags},
        "message": "Tags generated successfully",
    }


@router.post("/translate")
async def translate_content(
    request: TranslateRequest,
    assistant: BlogAssistant = Depends(get_blog_assistant),
):
    """번역"""
    if not request.content or not request.target_language:
        raise ApiError(
            400,
            "Content and target language are required",
            success=False,
            required=["content", "targetLanguage"],
        )
    if request.target_language not in LANGUAGE_NAMES:
        raise ApiError(
            400,
            f"Unsupported target language: {request.target_language}",
            success=False,
            supported=sorted(LANGUAGE_NAMES),
        )

    logger.info(f"Admin translating content to {request.target_language}")

    translated = await assistant.translate(request.content, request.target_language)
    if not translated:
        raise _unavailable("translate content")

    return {
        "success": True,
        "data": {
            "original": request.content,
            "translated": translated,
            "targetLanguage": request.target_language,
        },
        "message": "Content translated successfully",
    }

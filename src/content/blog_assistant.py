"""
블로그 AI 어시스턴트

Gemini API로 블로그 포스트 생성, 개선, 제목/요약/태그 생성, 번역을 수행합니다.
모든 작업은 실패 시 예외 대신 None (태그는 빈 리스트)을 반환합니다.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from src.content.prompts import (
    LANGUAGE_NAMES,
    build_generate_post_prompt,
    build_improve_prompt,
    build_title_prompt,
    build_excerpt_prompt,
    build_tags_prompt,
    build_translate_prompt,
)
from src.content.sanitizer import sanitize_content
from src.shared.gemini_client import GeminiClient
from src.shared.models import BlogGenerationRequest, GeneratedBlogPost, make_slug

logger = logging.getLogger("estimator.blog_assistant")

DEFAULT_IMPROVEMENTS = ["grammar", "clarity", "seo"]
MAX_POST_TAGS = 10
MAX_GENERATED_TAGS = 8

_CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\n?")
_TITLE_NUMBERING_PATTERN = re.compile(r"^\d+\.\s*")


def parse_json_response(text: str) -> Optional[Dict[str, Any]]:
    """응답에서 JSON 객체 추출 (코드 블록 표시 제거)"""
    cleaned = _CODE_FENCE_PATTERN.sub("", text).strip()
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        # JSON 부분만 추출 시도
        start = cleaned.find("{")
        end = cleaned.rfind("}") + 1
        if start < 0 or end <= start:
            return None
        try:
            parsed = json.loads(cleaned[start:end])
        except json.JSONDecodeError:
            return None
    return parsed if isinstance(parsed, dict) else None


class BlogAssistant:
    """
    블로그 AI 어시스턴트

    사용 예시:
        assistant = BlogAssistant(api_key="...", model="gemini-2.5-flash")
        post = await assistant.generate_post(BlogGenerationRequest(topic="FastAPI tips"))
        if post is None:
            ...  # Gemini 미설정 또는 실패
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.5-flash",
        client: Optional[GeminiClient] = None
    ):
        """
        Args:
            api_key: Gemini API 키 (없으면 비활성)
            model: 사용할 모델
            client: 주입할 클라이언트 (테스트용)
        """
        if client is not None:
            self.client = client
        elif api_key:
            self.client = GeminiClient(api_key=api_key, model=model)
        else:
            logger.warning("Gemini API key not configured. AI blog features will not work.")
            self.client = None

    @property
    def available(self) -> bool:
        return self.client is not None

    async def generate_post(self, request: BlogGenerationRequest) -> Optional[GeneratedBlogPost]:
        """주제로 블로그 포스트 전체 생성"""
        if not self.available:
            logger.warning("Gemini client not initialized. Cannot generate blog post.")
            return None

        prompt = build_generate_post_prompt(
            topic=request.topic,
            keywords=request.keywords,
            language=request.language.value,
            tone=request.tone.value,
            length=request.length.value,
        )

        try:
            text = await self.client.generate(prompt)
            logger.info("Generated blog post response from Gemini")
        except Exception as e:
            logger.error("Error generating blog post with Gemini:", extra={"data": e})
            return None

        parsed = parse_json_response(text)
        if parsed is None:
            logger.error("Failed to parse Gemini JSON response:", extra={"data": text[:500]})
            return None

        title = str(parsed.get("title") or "").strip() or "Untitled Post"
        tags = parsed.get("tags")
        post = GeneratedBlogPost(
            title=title,
            content=sanitize_content(str(parsed.get("content") or "")),
            excerpt=str(parsed.get("excerpt") or ""),
            tags=[str(tag) for tag in tags][:MAX_POST_TAGS] if isinstance(tags, list) else [],
            slug=make_slug(title),
        )

        logger.info("Successfully generated blog post:", extra={"data": {"title": post.title, "slug": post.slug}})
        return post

    async def improve_content(
        self,
        content: str,
        improvements: Optional[List[str]] = None
    ) -> Optional[str]:
        """기존 본문 개선"""
        if not self.available:
            logger.warning("Gemini client not initialized. Cannot improve content.")
            return None

        try:
            text = await self.client.generate(
                build_improve_prompt(content, improvements or DEFAULT_IMPROVEMENTS)
            )
        except Exception as e:
            logger.error("Error improving blog content with Gemini:", extra={"data": e})
            return None

        logger.info("Successfully improved blog content")
        return sanitize_content(text.strip()) or None

    async def generate_title(self, content: str) -> Optional[str]:
        """본문에서 제목 생성 (후보 중 첫 번째)"""
        if not self.available:
            logger.warning("Gemini client not initialized. Cannot generate title.")
            return None

        try:
            text = await self.client.generate(build_title_prompt(content))
        except Exception as e:
            logger.error("Error generating blog title with Gemini:", extra={"data": e})
            return None

        lines = [line.strip() for line in text.strip().split("\n") if line.strip()]
        title = _TITLE_NUMBERING_PATTERN.sub("", lines[0]).strip() if lines else ""
        title = title or "Untitled Post"

        logger.info("Successfully generated blog title:", extra={"data": title})
        return title

    async def generate_excerpt(self, content: str) -> Optional[str]:
        """본문에서 요약 생성"""
        if not self.available:
            logger.warning("Gemini client not initialized. Cannot generate excerpt.")
            return None

        try:
            text = await self.client.generate(build_excerpt_prompt(content))
        except Exception as e:
            logger.error("Error generating blog excerpt with Gemini:", extra={"data": e})
            return None

        logger.info("Successfully generated blog excerpt")
        return text.strip() or None

    async def generate_tags(self, content: str) -> List[str]:
        """본문에서 태그 생성 (최대 8개)"""
        if not self.available:
            logger.warning("Gemini client not initialized. Cannot generate tags.")
            return []

        try:
            text = await self.client.generate(build_tags_prompt(content))
        except Exception as e:
            logger.error("Error generating blog tags with Gemini:", extra={"data": e})
            return []

        tags = [tag.strip().lower() for tag in text.strip().split(",")]
        tags = [tag for tag in tags if tag][:MAX_GENERATED_TAGS]

        logger.info("Successfully generated blog tags:", extra={"data": tags})
        return tags

    async def translate(self, content: str, target_language: str) -> Optional[str]:
        """본문 번역 (en / pl)"""
        if not self.available:
            logger.warning("Gemini client not initialized. Cannot translate content.")
            return None

        if target_language not in LANGUAGE_NAMES:
            logger.warning(f"Unsupported target language: {target_language}")
            return None

        try:
            text = await self.client.generate(build_translate_prompt(content, target_language))
        except Exception as e:
            logger.error("Error translating blog content with Gemini:", extra={"data": e})
            return None

        logger.info(f"Successfully translated blog content to {target_language}")
        return sanitize_content(text.strip()) or None

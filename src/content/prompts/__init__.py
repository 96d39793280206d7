"""블로그 AI 프롬프트"""

from .blog_prompts import (
    LANGUAGE_NAMES,
    LENGTH_INSTRUCTIONS,
    CONTENT_PREVIEW_CHARS,
    build_generate_post_prompt,
    build_improve_prompt,
    build_title_prompt,
    build_excerpt_prompt,
    build_tags_prompt,
    build_translate_prompt,
)

__all__ = [
    "LANGUAGE_NAMES",
    "LENGTH_INSTRUCTIONS",
    "CONTENT_PREVIEW_CHARS",
    "build_generate_post_prompt",
    "build_improve_prompt",
    "build_title_prompt",
    "build_excerpt_prompt",
    "build_tags_prompt",
    "build_translate_prompt",
]

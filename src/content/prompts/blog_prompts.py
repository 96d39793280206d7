"""
블로그 AI 프롬프트

포스트 생성, 개선, 제목/요약/태그 생성, 번역 프롬프트입니다.
"""

from typing import List

LANGUAGE_NAMES = {
    "en": "English",
    "pl": "Polish (Polski)",
}

LENGTH_INSTRUCTIONS = {
    "short": "500-800 words",
    "medium": "800-1200 words",
    "long": "1200-2000 words",
}

# 본문 일부만 보내는 작업의 최대 글자수
CONTENT_PREVIEW_CHARS = 1000


def _preview(content: str) -> str:
    return f"{content[:CONTENT_PREVIEW_CHARS]}..."


def build_generate_post_prompt(
    topic: str,
    keywords: List[str],
    language: str,
    tone: str,
    length: str
) -> str:
    """포스트 생성 프롬프트 (JSON 응답)"""
    language_label = "Polish (Polski)" if language == "pl" else "English"
    language_plain = "Polish" if language == "pl" else "English"
    keywords_text = ", ".join(keywords) if keywords else "none specified"

    return f"""Create a comprehensive blog post about "{topic}" with the following requirements:

LANGUAGE: {language_label}
TONE: {tone or 'professional'}
LENGTH: {LENGTH_INSTRUCTIONS.get(length, LENGTH_INSTRUCTIONS['medium'])}
KEYWORDS: {keywords_text}

Please provide a response in this EXACT JSON format:
{{
  "title": "An engaging, SEO-friendly title",
  "content": "Full blog post content in markdown format with proper headings, paragraphs, and structure",
  "excerpt": "A compelling 2-3 sentence summary",
  "tags": ["tag1", "tag2", "tag3", "tag4", "tag5"]
}}

Requirements:
- Title should be catchy and SEO-optimized
- Content should be well-structured with H2/H3 headings
- Include practical examples and actionable advice
- Tags should be relevant and useful for categorization
- Write in {language_plain} language
- Use markdown formatting for better readability"""


def build_improve_prompt(content: str, improvements: List[str]) -> str:
    """본문 개선 프롬프트"""
    return f"""Please improve the following blog content by focusing on: {', '.join(improvements)}.

Original content:
{content}

Instructions:
- Fix any grammar and spelling errors
- Improve clarity and readability
- Enhance SEO with better structure and keywords
- Maintain the original tone and style
- Keep the same length approximately
- Return only the improved content, no explanations

Improved content:"""


def build_title_prompt(content: str) -> str:
    return f"""Based on the following blog content, generate 5 catchy, SEO-friendly titles. Make them engaging and click-worthy.

Content:
{_preview(content)}

Return only the titles, one per line:"""


def build_excerpt_prompt(content: str) -> str:
    return f"""Create a compelling 2-3 sentence excerpt for this blog post that will make people want to read more:

{_preview(content)}

The excerpt should:
- Be 150-200 characters
- Hook the reader's interest
- Summarize the main value proposition
- Be engaging and professional

Excerpt:"""


def build_tags_prompt(content: str) -> str:
    return f"""Analyze this blog content and generate 5-8 relevant tags for categorization and SEO:

{_preview(content)}

Requirements:
- Use single words or short phrases
- Make them relevant to the content
- Include both technical and general terms
- Separate with commas
- Keep them lowercase

Tags:"""


def build_translate_prompt(content: str, target_language: str) -> str:
    return f"""Translate the following blog content to {LANGUAGE_NAMES[target_language]}.
Maintain the same tone, style, and markdown formatting. Keep technical terms accurate.

Content to translate:
{content}

Translated content:"""

"""
콘텐츠 새니타이저

AI가 생성한 마크다운/HTML에서 실행 가능한 요소를 제거합니다.
"""

import re

import bleach

# 마크다운 본문에 섞여도 되는 태그
SAFE_TAGS = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "del", "div", "em",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "li", "ol",
    "p", "pre", "s", "span", "strong", "sub", "sup", "table", "tbody",
    "td", "th", "thead", "tr", "u", "ul",
})

SAFE_ATTRIBUTES = {
    "a": ["href", "title", "rel"],
    "img": ["src", "alt", "title", "width", "height"],
    "code": ["class"],
    "pre": ["class"],
    "span": ["class"],
    "div": ["class"],
    "th": ["align"],
    "td": ["align"],
}

SAFE_PROTOCOLS = frozenset({"http", "https", "mailto"})

# 내용까지 통째로 제거할 블록
_ACTIVE_BLOCK_PATTERN = re.compile(
    r"<(script|style|iframe|object|embed|noscript)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)

_cleaner = bleach.Cleaner(
    tags=SAFE_TAGS,
    attributes=SAFE_ATTRIBUTES,
    protocols=SAFE_PROTOCOLS,
    strip=True,  # 허용되지 않은 태그는 이스케이프 대신 제거
    strip_comments=True,
)


def sanitize_content(text: str) -> str:
    """AI 생성 콘텐츠 정리 (스크립트, 이벤트 핸들러, javascript: 링크 제거)"""
    if not text:
        return ""
    text = _ACTIVE_BLOCK_PATTERN.sub("", text)
    return _cleaner.clean(text)

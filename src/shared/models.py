"""
Estimator 데이터 모델

견적 요청, 이메일 수집, 블로그 포스트 데이터 구조를 정의합니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from slugify import slugify

T = TypeVar("T")


class BlogLanguage(str, Enum):
    """블로그 언어"""
    EN = "en"
    PL = "pl"


class BlogTone(str, Enum):
    """블로그 톤"""
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    TECHNICAL = "technical"


class BlogLength(str, Enum):
    """블로그 길이"""
    SHORT = "short"      # 500-800 words
    MEDIUM = "medium"    # 800-1200 words
    LONG = "long"        # 1200-2000 words


def make_slug(title: str) -> str:
    """제목에서 URL 슬러그 생성 (소문자, 영숫자 외 구간은 하이픈 하나로)"""
    # 숫자 사이 쉼표도 구분자로 취급 ("1,000" -> "1-000")
    return slugify(title or "", lowercase=True, replacements=[(",", "-")])


# ==================== Estimation ====================


@dataclass
class EstimationRequest:
    """견적 요청 (요청 처리 동안만 존재)"""
    project_name: str
    description: str
    timeline: str
    project_type: str
    selected_features: List[str] = field(default_factory=list)
    complexity: Optional[int] = None  # 0-100 (%)
    email: Optional[str] = None


@dataclass
class EmailCapture:
    """이메일 수집 레코드"""
    email: str
    project_name: Optional[str] = None
    project_type: Optional[str] = None
    features: List[str] = field(default_factory=list)
    complexity: Optional[int] = None
    estimation: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "project_name": self.project_name,
            "project_type": self.project_type,
            "features": self.features,
            "complexity": self.complexity,
            "estimation": self.estimation,
            "created_at": self.created_at,
        }


# ==================== Blog ====================


@dataclass
class BlogPost:
    """블로그 포스트"""
    title: str
    slug: str
    content: str  # 마크다운
    id: Optional[str] = None  # DB에서 자동 생성
    excerpt: Optional[str] = None
    featured_image_url: Optional[str] = None
    author: str = "Admin"
    published: bool = False
    tags: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "excerpt": self.excerpt,
            "featured_image_url": self.featured_image_url,
            "author": self.author,
            "published": self.published,
            "tags": self.tags,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_insert_dict(self) -> Dict[str, Any]:
        """INSERT용 (id, 타임스탬프는 DB에서 생성)"""
        data = self.to_dict()
        for key in ("id", "created_at", "updated_at"):
            data.pop(key, None)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlogPost":
        """딕셔너리에서 생성"""
        post_id = data.get("id")
        return cls(
            id=str(post_id) if post_id is not None else None,
            title=data.get("title", ""),
            slug=data.get("slug", ""),
            content=data.get("content", ""),
            excerpt=data.get("excerpt"),
            featured_image_url=data.get("featured_image_url"),
            author=data.get("author") or "Admin",
            published=bool(data.get("published", False)),
            tags=data.get("tags") or [],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class BlogGenerationRequest:
    """AI 블로그 생성 요청"""
    topic: str
    keywords: List[str] = field(default_factory=list)
    language: BlogLanguage = BlogLanguage.EN
    tone: BlogTone = BlogTone.PROFESSIONAL
    length: BlogLength = BlogLength.MEDIUM


@dataclass
class GeneratedBlogPost:
    """AI가 생성한 블로그 포스트"""
    title: str
    content: str
    excerpt: str
    tags: List[str]
    slug: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "excerpt": self.excerpt,
            "tags": self.tags,
            "slug": self.slug,
        }


# ==================== Store Result ====================


class StoreStatus(str, Enum):
    """데이터 저장소 호출 결과"""
    OK = "ok"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"  # 자격 증명 없음 (비활성)
    ERROR = "error"


@dataclass
class StoreResult(Generic[T]):
    """
    저장소 호출 결과

    예외 대신 상태를 돌려줍니다. "없음"과 "저장소 장애"를 구분합니다.
    """
    status: StoreStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == StoreStatus.OK

    @property
    def not_found(self) -> bool:
        return self.status == StoreStatus.NOT_FOUND

    @classmethod
    def success(cls, value: T = None) -> "StoreResult[T]":
        return cls(StoreStatus.OK, value=value)

    @classmethod
    def missing(cls) -> "StoreResult[T]":
        return cls(StoreStatus.NOT_FOUND)

    @classmethod
    def unavailable(cls) -> "StoreResult[T]":
        return cls(StoreStatus.UNAVAILABLE, error="Supabase client not initialized")

    @classmethod
    def failure(cls, error: str) -> "StoreResult[T]":
        return cls(StoreStatus.ERROR, error=error)

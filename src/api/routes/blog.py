"""
블로그 API

공개 엔드포인트:
- GET /api/blog - 발행된 포스트 목록
- GET /api/blog/{slug} - 발행된 포스트 상세

관리자 엔드포인트 (?key= 또는 관리자 세션 필요):
- GET /api/blog/admin/posts - 전체 포스트 목록
- POST /api/blog/admin/create - 포스트 생성
- PUT /api/blog/admin/{id} - 포스트 수정
- DELETE /api/blog/admin/{id} - 포스트 삭제
"""

import logging
from typing import Optional, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.api.auth import check_admin_access, check_admin_optional
from src.api.dependencies import get_store
from src.core.errors import ApiError
from src.shared.models import BlogPost, StoreResult, make_slug
from src.shared.supabase_client import SupabaseClient

logger = logging.getLogger("estimator.api.blog")
router = APIRouter()

PUBLIC_PAGE_SIZE = 10
ADMIN_PAGE_SIZE = 50

# 수정 시 null 로 지울 수 없는 필드
REQUIRED_POST_FIELDS = ("title", "slug", "content", "author")


# ========== 요청 모델 ==========

class CreatePostRequest(BaseModel):
    """포스트 생성 요청"""
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image_url: Optional[str] = None
    author: Optional[str] = None
    published: Optional[bool] = None
    status: Optional[str] = None  # "published" | "draft"
    tags: Optional[List[str]] = None


class UpdatePostRequest(BaseModel):
    """포스트 수정 요청 (published_at 등 그 외 필드는 무시)"""
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image_url: Optional[str] = None
    author: Optional[str] = None
    published: Optional[bool] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None


# ========== 헬퍼 ==========

def parse_page(limit: Optional[str], offset: Optional[str], default_limit: int):
    """쿼리 문자열 페이지 파라미터 (잘못된 값은 기본값)"""
    try:
        parsed_limit = int(limit)
    except (TypeError, ValueError):
        parsed_limit = 0
    try:
        parsed_offset = int(offset)
    except (TypeError, ValueError):
        parsed_offset = 0
    return (parsed_limit if parsed_limit > 0 else default_limit), max(parsed_offset, 0)


def resolve_published(published: Optional[bool], status: Optional[str]) -> Optional[bool]:
    """published(bool) 우선, 없으면 status == "published" """
    if published is not None:
        return published
    if status is not None:
        return status == "published"
    return None


def _page_response(posts: List[BlogPost], limit: int, offset: int) -> dict:
    return {
        "success": True,
        "data": [post.to_dict() for post in posts],
        "pagination": {
            "limit": limit,
            "offset": offset,
            "count": len(posts),
        },
    }


def _list(store: SupabaseClient, limit: int, offset: int, published_only: bool) -> List[BlogPost]:
    result = store.list_posts(limit=limit, offset=offset, published_only=published_only)
    if not result.ok:
        # 목록은 빈 페이지로 degrade
        logger.warning(f"Blog post listing unavailable ({result.status.value}): {result.error}")
        return []
    return result.value


def _store_error(result: StoreResult, error: str) -> ApiError:
    return ApiError(500, error, success=False, message=result.error or "Unknown error")


# ========== 공개 ==========

@router.get("")
def list_published_posts(
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    is_admin: bool = Depends(check_admin_optional),
    store: SupabaseClient = Depends(get_store),
):
    """발행된 포스트 목록 (관리자여도 발행된 것만)"""
    page_limit, page_offset = parse_page(limit, offset, PUBLIC_PAGE_SIZE)
    logger.info(f"Fetching published blog posts (limit: {page_limit}, offset: {page_offset}, admin: {is_admin})")

    posts = _list(store, page_limit, page_offset, published_only=True)
    # 저장소 필터와 별개로 한 번 더 보장
    posts = [post for post in posts if post.published]
    return _page_response(posts, page_limit, page_offset)


# ========== 관리자 ==========

@router.get("/admin/posts")
def list_all_posts(
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    _: bool = Depends(check_admin_access),
    store: SupabaseClient = Depends(get_store),
):
    """전체 포스트 목록 (미발행 포함)"""
    page_limit, page_offset = parse_page(limit, offset, ADMIN_PAGE_SIZE)
    logger.info(f"Admin fetching all blog posts (limit: {page_limit}, offset: {page_offset})")

    posts = _list(store, page_limit, page_offset, published_only=False)
    return _page_response(posts, page_limit, page_offset)


@router.post("/admin/create", status_code=201)
def create_post(
    request: CreatePostRequest,
    _: bool = Depends(check_admin_access),
    store: SupabaseClient = Depends(get_store),
):
    """포스트 생성 (슬러그 없으면 제목에서 생성)"""
    if not request.title or not request.content:
        raise ApiError(400, "Missing required fields", success=False, required=["title", "content"])

    slug = request.slug or make_slug(request.title)
    if not slug:
        raise ApiError(400, "Could not derive a slug from the title", success=False, required=["slug"])

    logger.info(f"Admin creating new blog post: {request.title}")

    post = BlogPost(
        title=request.title,
        slug=slug,
        content=request.content,
        excerpt=request.excerpt,
        featured_image_url=request.featured_image_url,
        author=request.author or "Admin",
        published=bool(resolve_published(request.published, request.status)),
        tags=request.tags or [],
    )

    result = store.create_post(post)
    if not result.ok:
        raise _store_error(result, "Failed to create blog post")

    return {
        "success": True,
        "data": result.value.to_dict(),
        "message": "Blog post created successfully",
    }


@router.put("/admin/{post_id}")
def update_post(
    post_id: str,
    request: UpdatePostRequest,
    _: bool = Depends(check_admin_access),
    store: SupabaseClient = Depends(get_store),
):
    """포스트 수정 (status 는 published 로 변환)"""
    # 보낸 필드만 반영 (null 은 값 지우기)
    updates = request.model_dump(exclude_unset=True, exclude={"status", "published"})
    cleared_required = [name for name in REQUIRED_POST_FIELDS if name in updates and updates[name] is None]
    if cleared_required:
        raise ApiError(400, "Required fields cannot be null", success=False, fields=cleared_required)

    published = resolve_published(request.published, request.status)
    if published is not None:
        updates["published"] = published

    if not updates:
        raise ApiError(400, "No fields to update", success=False)

    logger.info(f"Admin updating blog post: {post_id}")

    result = store.update_post(post_id, updates)
    if result.not_found:
        raise ApiError(404, "Blog post not found", success=False)
    if not result.ok:
        raise _store_error(result, "Failed to update blog post")

    return {
        "success": True,
        "data": result.value.to_dict(),
        "message": "Blog post updated successfully",
    }


@router.delete("/admin/{post_id}")
def delete_post(
    post_id: str,
    _: bool = Depends(check_admin_access),
    store: SupabaseClient = Depends(get_store),
):
    """포스트 삭제"""
    logger.info(f"Admin deleting blog post: {post_id}")

    result = store.delete_post(post_id)
    if result.not_found:
        raise ApiError(404, "Blog post not found", success=False)
    if not result.ok:
        raise _store_error(result, "Failed to delete blog post")

    return {"success": True, "message": "Blog post deleted successfully"}


# ========== 공개 (슬러그) ==========

@router.get("/{slug}")
def get_published_post(
    slug: str,
    is_admin: bool = Depends(check_admin_optional),
    store: SupabaseClient = Depends(get_store),
):
    """슬러그로 포스트 조회 (미발행은 404)"""
    logger.info(f"Fetching blog post by slug: {slug}")

    result = store.get_post_by_slug(slug)
    if result.not_found or (result.ok and not result.value.published):
        raise ApiError(404, "Blog post not found", success=False)
    if not result.ok:
        raise _store_error(result, "Failed to fetch blog post")

    return {"success": True, "data": result.value.to_dict()}

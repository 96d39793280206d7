"""
Supabase 클라이언트

이메일 수집 레코드와 블로그 포스트 데이터를 관리합니다.
모든 메서드는 예외를 밖으로 던지지 않고 StoreResult를 반환합니다.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from supabase import create_client, Client

from .models import BlogPost, EmailCapture, StoreResult

logger = logging.getLogger("estimator.supabase")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseClient:
    """
    Estimator용 Supabase 클라이언트

    자격 증명이 없으면 비활성 상태로 만들어지며,
    모든 작업이 네트워크 호출 없이 StoreResult.unavailable()을 반환합니다.

    사용 예시:
        client = SupabaseClient(url, key)
        result = client.create_post(post)
        if result.ok:
            post = result.value
    """

    def __init__(
        self,
        url: str,
        key: str,
        emails_table: str = "user_emails",
        blog_table: str = "blog_posts"
    ):
        """
        Args:
            url: Supabase 프로젝트 URL
            key: Supabase API 키 (anon)
            emails_table: 이메일 수집 테이블
            blog_table: 블로그 포스트 테이블
        """
        self.emails_table = emails_table
        self.blog_table = blog_table
        self.client: Optional[Client] = None

        if not url or not key:
            logger.warning("Supabase credentials not configured. Storage features will not work.")
            return

        try:
            self.client = create_client(url, key)
        except Exception as e:
            logger.error("Failed to create Supabase client:", extra={"data": e})
            self.client = None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    # ==================== Emails ====================

    def save_email(self, entry: EmailCapture) -> StoreResult[Dict[str, Any]]:
        """이메일 + 프로젝트 정보 저장"""
        if not self.enabled:
            logger.warning("Supabase client not initialized. Email not saved.")
            return StoreResult.unavailable()

        data = entry.to_dict()
        data["created_at"] = _now_iso()

        try:
            result = self.client.table(self.emails_table).insert([data]).execute()
        except Exception as e:
            logger.error("Error saving email to Supabase:", extra={"data": e})
            return StoreResult.failure(str(e))

        logger.info("Successfully saved email to Supabase:", extra={"data": entry.email})
        return StoreResult.success(result.data[0] if result.data else data)

    # ==================== Blog Posts ====================

    def create_post(self, post: BlogPost) -> StoreResult[BlogPost]:
        """포스트 생성"""
        if not self.enabled:
            logger.warning("Supabase client not initialized. Blog post not created.")
            return StoreResult.unavailable()

        try:
            result = self.client.table(self.blog_table).insert(post.to_insert_dict()).execute()
        except Exception as e:
            logger.error("Error creating blog post:", extra={"data": e})
            return StoreResult.failure(str(e))

        if not result.data:
            logger.error("Blog post insert returned no rows")
            return StoreResult.failure("Failed to create blog post")

        created = BlogPost.from_dict(result.data[0])
        logger.info(f"Blog post created: {created.id} ({created.slug})")
        return StoreResult.success(created)

    def update_post(self, post_id: str, updates: Dict[str, Any]) -> StoreResult[BlogPost]:
        """포스트 수정 (부분 업데이트)"""
        if not self.enabled:
            logger.warning("Supabase client not initialized. Blog post not updated.")
            return StoreResult.unavailable()

        data = dict(updates)
        data["updated_at"] = _now_iso()

        try:
            result = self.client.table(self.blog_table).update(data).eq("id", post_id).execute()
        except Exception as e:
            logger.error("Error updating blog post:", extra={"data": e})
            return StoreResult.failure(str(e))

        if not result.data:
            return StoreResult.missing()
        return StoreResult.success(BlogPost.from_dict(result.data[0]))

    def delete_post(self, post_id: str) -> StoreResult[bool]:
        """포스트 삭제"""
        if not self.enabled:
            logger.warning("Supabase client not initialized. Blog post not deleted.")
            return StoreResult.unavailable()

        try:
            result = self.client.table(self.blog_table).delete().eq("id", post_id).execute()
        except Exception as e:
            logger.error("Error deleting blog post:", extra={"data": e})
            return StoreResult.failure(str(e))

        if not result.data:
            return StoreResult.missing()
        return StoreResult.success(True)

    def list_posts(
        self,
        limit: int = 50,
        offset: int = 0,
        published_only: bool = False
    ) -> StoreResult[List[BlogPost]]:
        """포스트 목록 (최신순)"""
        if not self.enabled:
            logger.warning("Supabase client not initialized. Cannot list blog posts.")
            return StoreResult.unavailable()

        try:
            query = self.client.table(self.blog_table).select("*")
            if published_only:
                query = query.eq("published", True)
            query = query.order("created_at", desc=True).range(offset, offset + limit - 1)
            result = query.execute()
        except Exception as e:
            logger.error("Error listing blog posts:", extra={"data": e})
            return StoreResult.failure(str(e))

        return StoreResult.success([BlogPost.from_dict(item) for item in result.data or []])

    def get_post_by_slug(self, slug: str) -> StoreResult[BlogPost]:
        """슬러그로 포스트 조회"""
        if not self.enabled:
            logger.warning("Supabase client not initialized. Cannot fetch blog post.")
            return StoreResult.unavailable()

        try:
            result = (
                self.client.table(self.blog_table)
                .select("*")
                .eq("slug", slug)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("Error fetching blog post by slug:", extra={"data": e})
            return StoreResult.failure(str(e))

        if not result.data:
            return StoreResult.missing()
        return StoreResult.success(BlogPost.from_dict(result.data[0]))

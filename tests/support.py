"""
테스트 공용 헬퍼

가짜 저장소/어댑터와 의존성을 교체한 TestClient 를 만듭니다.
"""

from typing import Any, Dict, List

from fastapi.testclient import TestClient

from src.api.auth import AdminSessionStore, get_clock, get_session_store
from src.api.dependencies import get_blog_assistant, get_chat_client, get_estimator, get_store
from src.api.main import create_app
from src.core.config import Settings, get_settings
from src.shared.models import BlogPost, EmailCapture, StoreResult

ADMIN_KEY = "s3cret-admin-key"


def make_settings(**overrides) -> Settings:
    values = {
        "_env_file": None,
        "openai_api_key": "sk-test",
        "gemini_api_key": "gemini-test",
        "blog_admin_key": ADMIN_KEY,
        "project_env": "test",
        "node_env": None,
    }
    values.update(overrides)
    return Settings(**values)


class FakeStore:
    """메모리 저장소 (SupabaseClient 와 같은 인터페이스)"""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.posts: Dict[str, BlogPost] = {}
        self.emails: List[EmailCapture] = []
        self._next_id = 1
        self.fail_email = False

    def save_email(self, entry: EmailCapture) -> StoreResult:
        if self.fail_email:
            raise RuntimeError("store exploded")
        if not self.enabled:
            return StoreResult.unavailable()
        self.emails.append(entry)
        return StoreResult.success(entry.to_dict())

    def create_post(self, post: BlogPost) -> StoreResult:
        if not self.enabled:
            return StoreResult.unavailable()
        post.id = str(self._next_id)
        post.created_at = f"2026-01-{self._next_id:02d}T00:00:00+00:00"
        self._next_id += 1
        self.posts[post.id] = post
        return StoreResult.success(post)

    def update_post(self, post_id: str, updates: Dict[str, Any]) -> StoreResult:
        if not self.enabled:
            return StoreResult.unavailable()
        post = self.posts.get(post_id)
        if post is None:
            return StoreResult.missing()
        for key, value in updates.items():
            setattr(post, key, value)
        return StoreResult.success(post)

    def delete_post(self, post_id: str) -> StoreResult:
        if not self.enabled:
            return StoreResult.unavailable()
        if self.posts.pop(post_id, None) is None:
            return StoreResult.missing()
        return StoreResult.success(True)

    def list_posts(self, limit: int = 50, offset: int = 0, published_only: bool = False) -> StoreResult:
        if not self.enabled:
            return StoreResult.unavailable()
        posts = sorted(self.posts.values(), key=lambda p: p.created_at or "", reverse=True)
        if published_only:
            posts = [p for p in posts if p.published]
        return StoreResult.success(posts[offset:offset + limit])

    def get_post_by_slug(self, slug: str) -> StoreResult:
        if not self.enabled:
            return StoreResult.unavailable()
        for post in self.posts.values():
            if post.slug == slug:
                return StoreResult.success(post)
        return StoreResult.missing()


class FakeEstimator:
    def __init__(self, result: str = "Estimated Cost: $10,000 - $20,000", error: Exception = None):
        self.result = result
        self.error = error
        self.calls = []

    async def estimate(self, request):
        self.calls.append(request)
        if self.error:
            raise self.error
        return self.result


class FakeChatClient:
    def __init__(self, models=None, error: Exception = None):
        self.models = models if models is not None else [{"id": "gpt-4"}]
        self.error = error

    async def list_models(self):
        if self.error:
            raise self.error
        return self.models


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Harness:
    """앱 + 교체된 의존성 묶음"""

    def __init__(self, settings: Settings = None, store: FakeStore = None, estimator=None,
                 assistant=None, chat_client=None):
        self.settings = settings or make_settings()
        self.store = store or FakeStore()
        self.estimator = estimator or FakeEstimator()
        self.assistant = assistant
        self.chat_client = chat_client or FakeChatClient()
        self.sessions = AdminSessionStore()
        self.clock = FakeClock()

        self.app = create_app(self.settings)
        overrides = self.app.dependency_overrides
        overrides[get_settings] = lambda: self.settings
        overrides[get_store] = lambda: self.store
        overrides[get_estimator] = lambda: self.estimator
        overrides[get_chat_client] = lambda: self.chat_client
        overrides[get_session_store] = lambda: self.sessions
        overrides[get_clock] = lambda: self.clock
        if assistant is not None:
            overrides[get_blog_assistant] = lambda: self.assistant

        self.client = TestClient(self.app, raise_server_exceptions=False)

    def add_post(self, title: str, slug: str, published: bool, content: str = "Body") -> BlogPost:
        return self.store.create_post(
            BlogPost(title=title, slug=slug, content=content, published=published)
        ).value

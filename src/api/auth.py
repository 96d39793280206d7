"""
블로그 관리자 인증

쿼리 파라미터 ``?key=`` 또는 세션(쿠키에 담긴 세션 ID)으로 관리자를 확인합니다.
키가 맞으면 24시간짜리 세션을 발급합니다.
"""

import logging
import secrets
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Optional

from fastapi import Depends, Request, Response

from src.core.config import Settings, get_settings
from src.core.errors import ApiError

logger = logging.getLogger("estimator.auth")


@dataclass
class AdminSession:
    """관리자 세션 (허용된 키 + 만료 시각)"""
    admin_key: str
    expires_at: float  # epoch seconds

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class AdminSessionStore:
    """
    프로세스 내 관리자 세션 저장소

    세션 ID -> AdminSession. 세션 ID는 http-only 쿠키로 전달됩니다.
    """

    def __init__(self):
        self._sessions: Dict[str, AdminSession] = {}

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(32)

    def get(self, session_id: Optional[str]) -> Optional[AdminSession]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def grant(self, session_id: str, admin_key: str, expires_at: float, now: float) -> AdminSession:
        self.purge_expired(now)
        session = AdminSession(admin_key=admin_key, expires_at=expires_at)
        self._sessions[session_id] = session
        return session

    def purge_expired(self, now: float) -> int:
        """만료된 세션 일괄 제거 (제거한 개수 반환)"""
        expired = [sid for sid, session in self._sessions.items() if session.is_expired(now)]
        for session_id in expired:
            del self._sessions[session_id]
        return len(expired)

    def clear(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


@lru_cache()
def get_session_store() -> AdminSessionStore:
    return AdminSessionStore()


def get_clock() -> Callable[[], float]:
    return time.time


def _key_matches(candidate: str, secret: str) -> bool:
    return secrets.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


def _grant_session(
    request: Request,
    settings: Settings,
    sessions: AdminSessionStore,
    now: float,
) -> None:
    # 기존 세션 ID는 재사용하지 않음
    previous_id = request.cookies.get(settings.admin_cookie_name)
    if previous_id:
        sessions.clear(previous_id)

    session_id = sessions.new_session_id()
    ttl = settings.admin_session_hours * 60 * 60
    sessions.grant(session_id, settings.blog_admin_key, now + ttl, now)

    # 쿠키는 최종 응답에서 설정 (에러 응답 포함)
    request.state.admin_cookie = {
        "key": settings.admin_cookie_name,
        "value": session_id,
        "max_age": ttl,
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "lax",
    }


def attach_session_cookie(request: Request, response: Response) -> Response:
    """이번 요청에서 발급한 관리자 세션 쿠키를 응답에 설정"""
    cookie = getattr(request.state, "admin_cookie", None)
    if cookie:
        response.set_cookie(**cookie)
    return response


def check_admin_access(
    request: Request,
    settings: Settings = Depends(get_settings),
    sessions: AdminSessionStore = Depends(get_session_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> bool:
    """
    관리자 전용 라우트 가드

    Raises:
        ApiError: 500 ADMIN_NOT_CONFIGURED, 401 INVALID_ADMIN_KEY, 401 ADMIN_ACCESS_REQUIRED
    """
    if not settings.blog_admin_key:
        logger.warning("Blog admin key not configured")
        raise ApiError(500, "Admin authentication not configured", code="ADMIN_NOT_CONFIGURED")

    now = clock()
    query_key = request.query_params.get("key")

    # 쿼리 파라미터 우선 (최초 인증)
    if query_key:
        if _key_matches(query_key, settings.blog_admin_key):
            _grant_session(request, settings, sessions, now)
            request.state.is_admin = True
            logger.info("Admin authenticated via query parameter")
            return True

        logger.warning("Invalid admin key provided in query parameter")
        raise ApiError(401, "Invalid admin key", code="INVALID_ADMIN_KEY")

    session_id = request.cookies.get(settings.admin_cookie_name)
    session = sessions.get(session_id)
    if session:
        if session.is_expired(now):
            sessions.clear(session_id)
            logger.info("Admin session expired")
        elif session.admin_key == settings.blog_admin_key:
            request.state.is_admin = True
            logger.debug("Admin authenticated via session")
            return True

    logger.warning("Admin access denied - no valid authentication")
    raise ApiError(
        401,
        "Admin access required. Please use the admin URL with the correct key.",
        code="ADMIN_ACCESS_REQUIRED",
    )


def check_admin_optional(
    request: Request,
    settings: Settings = Depends(get_settings),
    sessions: AdminSessionStore = Depends(get_session_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> bool:
    """관리자 여부만 표시 (요청은 막지 않음)"""
    request.state.is_admin = False
    if not settings.blog_admin_key:
        return False

    now = clock()
    query_key = request.query_params.get("key")

    if query_key and _key_matches(query_key, settings.blog_admin_key):
        _grant_session(request, settings, sessions, now)
        request.state.is_admin = True
        return True

    session_id = request.cookies.get(settings.admin_cookie_name)
    session = sessions.get(session_id)
    if session and not session.is_expired(now) and session.admin_key == settings.blog_admin_key:
        request.state.is_admin = True

    return request.state.is_admin

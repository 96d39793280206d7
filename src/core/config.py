"""
Estimator API 설정 관리

환경 변수를 로드하고 설정값을 관리합니다.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("estimator.config")


class ConfigurationError(Exception):
    """필수 설정 누락"""


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 5001

    # OpenAI (견적 산출)
    openai_api_key: str = ""
    openai_model: str = "gpt-4"
    openai_max_tokens: int = 500
    openai_temperature: float = 0.7
    openai_base_url: str = "https://api.openai.com/v1"

    # 견적 금액 범위 (프롬프트로만 전달)
    estimate_min_cost: int = 6000
    estimate_max_cost: int = 34000
    estimate_currency: str = "USD"

    # CORS
    frontend_url: str = ""
    cors_origin_regex: str = r"https://.*\.netlify\.app"

    # Gemini (블로그 AI)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # 블로그 관리자
    blog_admin_key: str = ""
    admin_session_hours: int = 24
    admin_cookie_name: str = "admin_session"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_emails_table: str = "user_emails"
    supabase_blog_table: str = "blog_posts"

    # 환경
    project_env: str = "development"
    log_level: str = "INFO"

    # Node 시절 환경 변수 호환
    node_env: Optional[str] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.node_env:
            self.project_env = self.node_env

    @property
    def is_production(self) -> bool:
        return self.project_env.lower() == "production"

    def cors_options(self) -> Dict[str, Any]:
        """CORSMiddleware 인자

        프로덕션이 아니면 모든 origin 허용 (credentials 사용을 위해 origin 반사).
        """
        options: Dict[str, Any] = {
            "allow_credentials": True,
            "allow_methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Accept", "Authorization"],
        }
        if self.is_production:
            options["allow_origins"] = [self.frontend_url] if self.frontend_url else []
            options["allow_origin_regex"] = self.cors_origin_regex or None
        else:
            options["allow_origin_regex"] = ".*"
        return options


def validate_settings(settings: Settings) -> List[str]:
    """
    시작 시 설정 검증

    Raises:
        ConfigurationError: OpenAI 키 누락, 또는 프로덕션에서 Supabase 설정 누락

    Returns:
        경고 메시지 목록 (기능 일부 비활성)
    """
    if not settings.openai_api_key:
        raise ConfigurationError("OpenAI API key is not configured")

    if settings.is_production:
        if not settings.supabase_url:
            raise ConfigurationError("Supabase URL is not configured")
        if not settings.supabase_anon_key:
            raise ConfigurationError("Supabase Anon Key is not configured")

    warnings = []
    if not settings.gemini_api_key:
        warnings.append("Gemini API key is not configured. AI blog features will not work.")
    if not settings.blog_admin_key:
        warnings.append("Blog admin key is not configured. Admin routes will not work.")

    for message in warnings:
        logger.warning(message)

    return warnings


@lru_cache()
def get_settings() -> Settings:
    """설정 싱글톤 반환"""
    return Settings()

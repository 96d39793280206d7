"""
FastAPI 의존성 연결

어댑터는 프로세스 단위 싱글톤입니다. 테스트에서는
app.dependency_overrides 로 교체합니다.
"""

from functools import lru_cache

from fastapi import Depends

from src.content.blog_assistant import BlogAssistant
from src.core.config import Settings, get_settings
from src.estimation import CostEstimator
from src.shared.openai_client import OpenAIClient
from src.shared.supabase_client import SupabaseClient


@lru_cache()
def _store(url: str, key: str, emails_table: str, blog_table: str) -> SupabaseClient:
    return SupabaseClient(url, key, emails_table=emails_table, blog_table=blog_table)


@lru_cache()
def _blog_assistant(api_key: str, model: str) -> BlogAssistant:
    return BlogAssistant(api_key=api_key, model=model)


def get_store(settings: Settings = Depends(get_settings)) -> SupabaseClient:
    return _store(
        settings.supabase_url,
        settings.supabase_anon_key,
        settings.supabase_emails_table,
        settings.supabase_blog_table,
    )


def get_chat_client(settings: Settings = Depends(get_settings)) -> OpenAIClient:
    return OpenAIClient(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
    )


def get_estimator(
    settings: Settings = Depends(get_settings),
    client: OpenAIClient = Depends(get_chat_client),
) -> CostEstimator:
    return CostEstimator(
        client,
        min_cost=settings.estimate_min_cost,
        max_cost=settings.estimate_max_cost,
        currency=settings.estimate_currency,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
    )


def get_blog_assistant(settings: Settings = Depends(get_settings)) -> BlogAssistant:
    return _blog_assistant(settings.gemini_api_key, settings.gemini_model)

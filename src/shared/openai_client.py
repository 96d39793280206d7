"""
OpenAI API 클라이언트

견적 산출을 위한 Chat Completions API 통신 모듈입니다.
OpenAI 호환 API(base_url 지정)에서도 동작합니다.
"""

import aiohttp
import logging
from typing import Optional, Dict, Any, List

logger = logging.getLogger("estimator.openai_client")


class OpenAIAPIError(Exception):
    """
    OpenAI API 에러 응답

    category:
        bad_request / rate_limit / authentication / other
    """

    _TYPE_CATEGORIES = {
        "invalid_request_error": "bad_request",
        "rate_limit_error": "rate_limit",
        "authentication_error": "authentication",
    }

    _STATUS_CATEGORIES = {
        400: "bad_request",
        401: "authentication",
        429: "rate_limit",
    }

    def __init__(self, status: int, message: str, error_type: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.error_type = error_type

    @property
    def category(self) -> str:
        if self.error_type in self._TYPE_CATEGORIES:
            return self._TYPE_CATEGORIES[self.error_type]
        return self._STATUS_CATEGORIES.get(self.status, "other")

    @classmethod
    def from_response(cls, status: int, body: Any, fallback_text: str = "") -> "OpenAIAPIError":
        """에러 응답 본문 {"error": {"message", "type"}} 파싱"""
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            return cls(
                status=status,
                message=error.get("message") or f"OpenAI API error: {status}",
                error_type=error.get("type"),
            )
        return cls(status=status, message=fallback_text or f"OpenAI API error: {status}")


class OpenAIClient:
    """
    OpenAI API 클라이언트

    사용 예시:
        client = OpenAIClient(api_key="your_api_key", model="gpt-4")

        response = await client.chat(
            user_prompt="Estimate the cost of an online shop",
            system_prompt=ESTIMATION_SYSTEM_PROMPT,
        )
    """

    BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4",
        base_url: str = None,
        timeout: float = 60
    ):
        """
        Args:
            api_key: OpenAI API 키
            model: 사용할 모델 (기본: gpt-4)
            base_url: API 베이스 URL (기본: https://api.openai.com/v1)
            timeout: 요청 타임아웃 (초)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json"
        }

    async def _raise_for_error(self, response: aiohttp.ClientResponse) -> None:
        if response.status == 200:
            return
        error_text = await response.text()
        logger.error(f"OpenAI API error: {response.status} - {error_text}")
        try:
            body = await response.json(content_type=None)
        except ValueError:
            body = None
        raise OpenAIAPIError.from_response(response.status, body, error_text)

    async def chat(
        self,
        user_prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 500
    ) -> str:
        """
        채팅 완성 요청

        Args:
            user_prompt: 사용자 프롬프트
            system_prompt: 시스템 프롬프트 (선택)
            temperature: 생성 온도 (0.0-2.0)
            max_tokens: 최대 토큰 수

        Returns:
            생성된 텍스트

        Raises:
            OpenAIAPIError: API가 200 이외의 상태를 반환한 경우
        """
        messages = []

        if system_prompt:
            messages.append({
                "role": "system",
                "content": system_prompt
            })

        messages.append({
            "role": "user",
            "content": user_prompt
        })

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    f"{self.base_url}/chat/completions",
                    headers=self.headers,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    await self._raise_for_error(response)

                    result = await response.json()
                    content = result["choices"][0]["message"]["content"] or ""

                    # 토큰 사용량 로깅
                    usage = result.get("usage", {})
                    logger.info(
                        f"OpenAI usage - prompt: {usage.get('prompt_tokens', 0)}, "
                        f"completion: {usage.get('completion_tokens', 0)}, "
                        f"total: {usage.get('total_tokens', 0)}"
                    )

                    return content

        except aiohttp.ClientError as e:
            logger.error(f"HTTP client error: {e}")
            raise

    async def list_models(self) -> List[Dict[str, Any]]:
        """사용 가능한 모델 목록 (헬스체크용)"""
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    f"{self.base_url}/models",
                    headers=self.headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    await self._raise_for_error(response)
                    result = await response.json()
                    return result.get("data") or []

        except aiohttp.ClientError as e:
            logger.error(f"HTTP client error: {e}")
            raise

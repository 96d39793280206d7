"""
Gemini API 클라이언트

블로그 AI 기능을 위한 google-genai 래퍼입니다.
"""

import logging
from typing import Optional

from google import genai
from google.genai import types

logger = logging.getLogger("estimator.gemini_client")

MAX_OUTPUT_TOKENS = 8192


class GeminiInvalidResponseException(Exception):
    pass


class GeminiClient:
    """
    Gemini 텍스트 생성 클라이언트

    사용 예시:
        client = GeminiClient(api_key="...", model="gemini-2.5-flash")
        text = await client.generate("Write a haiku about rain")
    """

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash"):
        self.model = model
        self.client = genai.Client(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_output_tokens: int = MAX_OUTPUT_TOKENS
    ) -> str:
        """
        텍스트 생성

        Raises:
            GeminiInvalidResponseException: 응답 텍스트가 비어 있는 경우
        """
        truncated = (prompt[:200] + "...") if len(prompt) > 200 else prompt
        logger.debug(f"Calling Gemini ({self.model}), prompt: '{truncated}'")

        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            ),
        )
        if not response.text:
            raise GeminiInvalidResponseException("Empty response from Gemini")
        return response.text

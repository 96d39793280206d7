"""
프로젝트 비용 견적기

프로젝트 정보를 프롬프트로 만들어 OpenAI에 견적 범위를 요청합니다.
금액 범위는 시스템 프롬프트로만 제한하며 서버에서 보정하지 않습니다.
"""

import logging

from src.shared.models import EstimationRequest
from src.shared.openai_client import OpenAIClient

logger = logging.getLogger("estimator.estimation")


ESTIMATION_SYSTEM_PROMPT = (
    "The response should be in the format of "
    "'Estimated Cost: {symbol}{example_low:,} - {symbol}{example_high:,}'. "
    "The lower bound must never be below {symbol}{min_cost:,} and the upper bound "
    "must never exceed {symbol}{max_cost:,}. That's all."
)

ESTIMATION_PROMPT = """Please provide a project cost estimation for the following software project:
    Project Name: {project_name}
    Project Type: {project_type}
    Description: {description}
    Timeline: {timeline}
    Selected Features: {features}
    Complexity Level: {complexity}

    Please provide short, concise cost estimation range in {currency}, considering the project scope, timeline, selected features, and complexity level. Include a brief explanation of the estimation."""

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "PLN": "zł",
}


class CostEstimator:
    """
    프로젝트 비용 견적기

    사용 예시:
        estimator = CostEstimator(OpenAIClient(api_key="..."))
        text = await estimator.estimate(request)
        # "Estimated Cost: $10,000 - $20,000"
    """

    def __init__(
        self,
        client: OpenAIClient,
        min_cost: int = 6000,
        max_cost: int = 34000,
        currency: str = "USD",
        temperature: float = 0.7,
        max_tokens: int = 500
    ):
        self.client = client
        self.min_cost = min_cost
        self.max_cost = max_cost
        self.currency = currency
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_system_prompt(self) -> str:
        symbol = CURRENCY_SYMBOLS.get(self.currency.upper(), "")
        low = self.min_cost
        high = max(low, min(self.max_cost, low * 2))
        return ESTIMATION_SYSTEM_PROMPT.format(
            symbol=symbol,
            example_low=low,
            example_high=high,
            min_cost=self.min_cost,
            max_cost=self.max_cost,
        )

    def build_prompt(self, request: EstimationRequest) -> str:
        features = ", ".join(request.selected_features) if request.selected_features else "None"
        complexity = f"{request.complexity}%" if request.complexity is not None else "not specified"
        return ESTIMATION_PROMPT.format(
            project_name=request.project_name,
            project_type=request.project_type,
            description=request.description,
            timeline=request.timeline,
            features=features,
            complexity=complexity,
            currency=self.currency,
        )

    async def estimate(self, request: EstimationRequest) -> str:
        """
        견적 산출

        Returns:
            AI 응답 텍스트 (그대로 반환)

        Raises:
            OpenAIAPIError: 공급자 에러 (라우트에서 상태 코드로 변환)
        """
        estimation = await self.client.chat(
            user_prompt=self.build_prompt(request),
            system_prompt=self.build_system_prompt(),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        estimation = estimation.strip()
        logger.info("Generated estimation:", extra={"data": estimation})
        return estimation

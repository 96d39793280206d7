"""
Estimation 모듈 - 프로젝트 비용 견적

OpenAI Chat Completions API로 프로젝트 견적 범위를 산출합니다.
"""

from .estimator import CostEstimator

__all__ = ["CostEstimator"]

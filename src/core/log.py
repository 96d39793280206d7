"""
로깅 설정

레벨 표시를 붙여 stdout/stderr 로 출력합니다.
추가 데이터는 ``extra={"data": ...}`` 로 전달합니다.

사용 예시:
    logger.info("Processing request for:", extra={"data": {"projectName": "Shop"}})
"""

import json
import logging
import sys
import traceback
from typing import Any, Optional, TextIO

LEVEL_PREFIXES = {
    logging.DEBUG: "🔍",
    logging.INFO: "📝",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "❌",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def format_data(data: Any) -> str:
    """로그 페이로드 직렬화"""
    if data is None or data == "":
        return ""
    if isinstance(data, BaseException):
        return "".join(
            traceback.format_exception(type(data), data, data.__traceback__)
        ).rstrip()
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


class LevelPrefixFormatter(logging.Formatter):
    """레벨 표시 + 데이터 직렬화 포매터"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        prefix = LEVEL_PREFIXES.get(record.levelno, "")
        payload = format_data(getattr(record, "data", None))
        if payload:
            line = f"{line} {payload}"
        return f"{prefix} {line}" if prefix else line


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def setup_logging(
    level: str = "INFO",
    name: str = "estimator",
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> logging.Logger:
    """
    로거 설정

    WARNING 미만은 stdout, 이상은 stderr 로 보냅니다.
    다시 호출하면 기존 핸들러를 교체합니다.
    """
    root = logging.getLogger(name)
    root.setLevel(level.upper())
    root.propagate = False

    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = LevelPrefixFormatter(LOG_FORMAT)

    stdout_handler = logging.StreamHandler(stdout or sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))

    stderr_handler = logging.StreamHandler(stderr or sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)

    return root

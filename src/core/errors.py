"""
API 에러 정의 및 핸들러
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("estimator.errors")


class ApiError(Exception):
    """
    JSON 본문을 가진 HTTP 에러

    사용 예시:
        raise ApiError(400, "Missing required fields", required=["title", "content"])
    """

    def __init__(self, status_code: int, error: str, **fields: Any):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.fields = fields

    def to_dict(self) -> dict:
        body = {}
        # success 플래그는 맨 앞에
        if "success" in self.fields:
            body["success"] = self.fields["success"]
        body["error"] = self.error
        body.update({k: v for k, v in self.fields.items() if k != "success"})
        return body


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        f"Invalid request body for {request.method} {request.url.path}",
        extra={"data": exc.errors()},
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": [
                {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
                for err in exc.errors()
            ],
        },
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        logger.warning(f"Route not found: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not found",
                "message": f"Route {request.method} {request.url.path} not found",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception):
    """전역 예외 핸들러"""
    logger.error("Global error handler:", exc_info=True, extra={"data": f"{type(exc).__name__}: {exc}"})
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) or "Unknown error occurred",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

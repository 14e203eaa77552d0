"""API error envelope."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from renrakun_actor_limit import ActorLimitError, ActorLimitStoreError
from renrakun_quota_client import QuotaClientError, QuotaExceededError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class ApiErrorCodes:
    """Error codes returned to API callers."""

    SERVICE_PAUSED_DAILY_QUOTA: str = "SERVICE_PAUSED_DAILY_QUOTA"
    TOO_MANY_REQUESTS: str = "TOO_MANY_REQUESTS"
    INTERNAL_SERVER_ERROR: str = "INTERNAL_SERVER_ERROR"
    HTTP_ERROR: str = "HTTP_ERROR"


def error_body(code: str, message: str, resume_at: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "message": message}
    if resume_at is not None:
        body["resumeAt"] = resume_at
    return body


def _internal_error() -> JSONResponse:
    return JSONResponse(
        error_body(ApiErrorCodes.INTERNAL_SERVER_ERROR, "Internal server error"),
        status_code=500,
    )


def install_error_handlers(app: FastAPI) -> None:
    """Render library errors as ``{code, message, resumeAt?}`` responses."""

    @app.exception_handler(QuotaExceededError)
    async def quota_exceeded(_request: Request, exc: QuotaExceededError) -> JSONResponse:
        return JSONResponse(
            error_body(
                ApiErrorCodes.SERVICE_PAUSED_DAILY_QUOTA,
                "Daily write quota reached",
                resume_at=exc.resume_at,
            ),
            status_code=503,
        )

    @app.exception_handler(ActorLimitError)
    async def actor_limited(_request: Request, exc: ActorLimitError) -> JSONResponse:
        return JSONResponse(
            error_body(ApiErrorCodes.TOO_MANY_REQUESTS, str(exc)),
            status_code=429,
        )

    @app.exception_handler(QuotaClientError)
    async def quota_unavailable(request: Request, exc: QuotaClientError) -> JSONResponse:
        # Fail closed: no answer from the gate means no write.
        logger.error("quota_gate_unavailable", path=request.url.path, code=exc.code, error=str(exc))
        return _internal_error()

    @app.exception_handler(ActorLimitStoreError)
    async def actor_store_failed(request: Request, exc: ActorLimitStoreError) -> JSONResponse:
        logger.error("actor_limit_store_failed", path=request.url.path, error=str(exc))
        return _internal_error()

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail if isinstance(exc.detail, str) and exc.detail else None
        return JSONResponse(
            error_body(detail or ApiErrorCodes.HTTP_ERROR, detail or "Request failed"),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_api_error", path=request.url.path)
        return _internal_error()

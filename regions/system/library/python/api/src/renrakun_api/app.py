"""renrakun API application."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from renrakun_actor_limit import ActorLimiter
from renrakun_quota_client import DailyResetJob, DailyWriteQuota

from .dependencies import get_quota
from .errors import install_error_handlers

logger = structlog.get_logger(__name__)

SERVICE_NAME = "renrakun-api"

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

_CORS_HEADERS = ["Content-Type", "x-device-id", "x-member-id", "x-app-lang"]


def create_app(
    quota: DailyWriteQuota,
    actor_limiter: ActorLimiter,
    reset_job: DailyResetJob | None = None,
    app_origin: str = "*",
) -> FastAPI:
    """Build the API app with the status routes only.

    The embedding application mounts its own write routes on the returned app
    and guards them with ``Depends(require_write_quota)``; group create/join
    routes also take ``Depends(require_actor_limit)``. The reset job, when
    given, runs for the lifetime of the app.
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if reset_job is not None:
            reset_job.start()
            logger.info("quota_reset_job_started")
        try:
            yield
        finally:
            if reset_job is not None:
                await reset_job.stop()
                logger.info("quota_reset_job_stopped")

    app = FastAPI(
        title=SERVICE_NAME,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.quota = quota
    app.state.actor_limiter = actor_limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_origin or "*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=_CORS_HEADERS,
        max_age=86400,
    )

    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(_SECURITY_HEADERS)
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"
        return response

    install_error_handlers(app)

    @app.get("/")
    async def root() -> dict[str, Any]:
        return {"service": SERVICE_NAME, "status": "ok"}

    @app.get("/api/quota/status")
    async def quota_status(quota: DailyWriteQuota = Depends(get_quota)) -> dict[str, Any]:
        snapshot = await quota.get_quota_status()
        return snapshot.to_response()

    return app

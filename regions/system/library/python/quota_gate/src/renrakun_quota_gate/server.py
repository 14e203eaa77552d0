"""HTTP transport for a single gate instance."""

from __future__ import annotations

import json
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from renrakun_telemetry.metrics import quota_gate_errors_total
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import InvalidPayloadError, QuotaGateErrorCodes, StorageError
from .gate import QuotaGate
from .models import EMPTY_STATUS

logger = structlog.get_logger(__name__)


async def _read_body(request: Request) -> dict[str, Any]:
    # Anything but a JSON object is treated as an empty payload and fails validation.
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def create_app(gate: QuotaGate) -> FastAPI:
    """Build the gate app: POST /consume, POST /force-reset, GET /status."""
    app = FastAPI(
        title="renrakun quota gate",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.post("/consume")
    async def consume(request: Request) -> JSONResponse:
        body = await _read_body(request)
        record = await gate.consume(body.get("dayKey"), body.get("limit"), body.get("resumeAt"))
        return JSONResponse(record.to_dict())

    @app.post("/force-reset")
    async def force_reset(request: Request) -> JSONResponse:
        body = await _read_body(request)
        record = await gate.force_reset(
            body.get("dayKey"), body.get("limit"), body.get("resumeAt")
        )
        return JSONResponse(record.to_dict())

    @app.get("/status")
    async def status() -> JSONResponse:
        record = await gate.status()
        return JSONResponse(record.to_dict() if record is not None else EMPTY_STATUS)

    @app.exception_handler(InvalidPayloadError)
    async def invalid_payload(_request: Request, exc: InvalidPayloadError) -> JSONResponse:
        quota_gate_errors_total.add(1, {"code": exc.code})
        return JSONResponse({"code": exc.code}, status_code=400)

    @app.exception_handler(StorageError)
    async def storage_failed(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("quota_storage_failed", gate=gate.name, path=request.url.path, error=str(exc))
        quota_gate_errors_total.add(1, {"code": exc.code})
        return JSONResponse({"code": exc.code}, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def not_found(_request: Request, _exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and wrong methods are both reported as NOT_FOUND.
        return JSONResponse({"code": QuotaGateErrorCodes.NOT_FOUND}, status_code=404)

    return app

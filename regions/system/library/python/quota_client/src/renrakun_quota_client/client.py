"""Quota gate client implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from renrakun_quota_gate import InvalidPayloadError, QuotaGate, QuotaGateError

from .config import QuotaClientConfig
from .exceptions import QuotaClientError, QuotaClientErrorCodes
from .model import QuotaSnapshot


class QuotaGateClient(ABC):
    """Abstract quota gate client."""

    @abstractmethod
    async def consume(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot: ...

    @abstractmethod
    async def force_reset(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot: ...

    @abstractmethod
    async def status(self) -> QuotaSnapshot: ...


class HttpQuotaGateClient(QuotaGateClient):
    """Talks to a gate server over HTTP with httpx.

    Calls are never retried here: a consume whose outcome is unknown must not
    be sent twice.
    """

    def __init__(
        self,
        config: QuotaClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._headers = {"Content-Type": "application/json"}

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.server_url,
            headers=self._headers,
            timeout=self._config.timeout.total_seconds(),
            transport=self._transport,
        )

    def _parse(self, resp: httpx.Response, context: str) -> QuotaSnapshot:
        if resp.status_code == 400:
            raise QuotaClientError(
                code=QuotaClientErrorCodes.INVALID_REQUEST,
                message=f"{context}: gate rejected payload: {resp.text}",
            )
        if resp.status_code >= 400:
            raise QuotaClientError(
                code=QuotaClientErrorCodes.HTTP_ERROR,
                message=f"{context}: HTTP {resp.status_code}: {resp.text}",
            )
        try:
            data: dict[str, Any] = resp.json()
            return QuotaSnapshot.from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise QuotaClientError(
                code=QuotaClientErrorCodes.INVALID_RESPONSE,
                message=f"{context}: malformed gate response: {resp.text}",
                cause=e,
            ) from e

    async def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> QuotaSnapshot:
        try:
            async with self._make_client() as client:
                resp = await client.request(method, path, json=body)
        except httpx.TimeoutException as e:
            raise QuotaClientError(
                code=QuotaClientErrorCodes.TIMEOUT,
                message=f"{method} {path}: gate call timed out",
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise QuotaClientError(
                code=QuotaClientErrorCodes.HTTP_ERROR,
                message=f"{method} {path}: gate unreachable: {e}",
                cause=e,
            ) from e
        return self._parse(resp, f"{method} {path}")

    async def consume(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot:
        return await self._request(
            "POST", "/consume", {"dayKey": day_key, "limit": limit, "resumeAt": resume_at}
        )

    async def force_reset(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot:
        return await self._request(
            "POST", "/force-reset", {"dayKey": day_key, "limit": limit, "resumeAt": resume_at}
        )

    async def status(self) -> QuotaSnapshot:
        return await self._request("GET", "/status")


class LocalQuotaGateClient(QuotaGateClient):
    """Calls a QuotaGate in the same process.

    Only correct when every request handler shares this process; otherwise
    run the gate server and use HttpQuotaGateClient.
    """

    def __init__(self, gate: QuotaGate) -> None:
        self._gate = gate

    async def _call(self, op: str, *args: Any) -> QuotaSnapshot:
        try:
            record = await getattr(self._gate, op)(*args)
        except InvalidPayloadError as e:
            raise QuotaClientError(
                code=QuotaClientErrorCodes.INVALID_REQUEST,
                message=f"{op}: {e}",
                cause=e,
            ) from e
        except QuotaGateError as e:
            raise QuotaClientError(
                code=QuotaClientErrorCodes.GATE_ERROR,
                message=f"{op}: {e}",
                cause=e,
            ) from e
        if record is None:
            return QuotaSnapshot.from_dict({"state": "open"})
        return QuotaSnapshot.from_record(record)

    async def consume(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot:
        return await self._call("consume", day_key, limit, resume_at)

    async def force_reset(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot:
        return await self._call("force_reset", day_key, limit, resume_at)

    async def status(self) -> QuotaSnapshot:
        return await self._call("status")

"""HttpQuotaGateClient tests (respx mocks)."""

import json
from datetime import timedelta

import httpx
import pytest
import respx
from renrakun_quota_client import (
    HttpQuotaGateClient,
    QuotaClientConfig,
    QuotaClientError,
    QuotaClientErrorCodes,
)
from renrakun_quota_gate import QuotaState

BASE_URL = "http://quota-gate:8787"
RECORD = {
    "dayKey": "2024-01-01",
    "count": 1,
    "limit": 3,
    "state": "open",
    "resumeAt": "2024-01-01T15:00:00.000Z",
}


def make_client() -> HttpQuotaGateClient:
    return HttpQuotaGateClient(QuotaClientConfig(server_url=BASE_URL, timeout=timedelta(seconds=1)))


@respx.mock
async def test_consume_success() -> None:
    route = respx.post(f"{BASE_URL}/consume").mock(return_value=httpx.Response(200, json=RECORD))
    snapshot = await make_client().consume("2024-01-01", 3, "2024-01-01T15:00:00.000Z")
    assert snapshot.count == 1
    assert snapshot.state == QuotaState.OPEN
    sent = json.loads(route.calls.last.request.content)
    assert sent == {"dayKey": "2024-01-01", "limit": 3, "resumeAt": "2024-01-01T15:00:00.000Z"}


@respx.mock
async def test_consume_paused() -> None:
    respx.post(f"{BASE_URL}/consume").mock(
        return_value=httpx.Response(200, json={**RECORD, "count": 3, "state": "paused"})
    )
    snapshot = await make_client().consume("2024-01-01", 3, "2024-01-01T15:00:00.000Z")
    assert snapshot.state == QuotaState.PAUSED
    assert snapshot.count == 3


@respx.mock
async def test_force_reset_success() -> None:
    respx.post(f"{BASE_URL}/force-reset").mock(
        return_value=httpx.Response(200, json={**RECORD, "count": 0})
    )
    snapshot = await make_client().force_reset("2024-01-01", 3, "2024-01-01T15:00:00.000Z")
    assert snapshot.count == 0


@respx.mock
async def test_status_empty_sentinel() -> None:
    respx.get(f"{BASE_URL}/status").mock(
        return_value=httpx.Response(
            200,
            json={"dayKey": None, "count": 0, "limit": 0, "state": "open", "resumeAt": None},
        )
    )
    snapshot = await make_client().status()
    assert snapshot.is_empty
    assert snapshot.day_key is None


@respx.mock
async def test_bad_request_maps_to_invalid_request() -> None:
    respx.post(f"{BASE_URL}/consume").mock(
        return_value=httpx.Response(400, json={"code": "INVALID_CONSUME_PAYLOAD"})
    )
    with pytest.raises(QuotaClientError) as exc_info:
        await make_client().consume("2024-01-01", 3, "x")
    assert exc_info.value.code == QuotaClientErrorCodes.INVALID_REQUEST


@respx.mock
async def test_server_error_maps_to_http_error() -> None:
    respx.post(f"{BASE_URL}/consume").mock(
        return_value=httpx.Response(500, json={"code": "STORAGE_ERROR"})
    )
    with pytest.raises(QuotaClientError) as exc_info:
        await make_client().consume("2024-01-01", 3, "x")
    assert exc_info.value.code == QuotaClientErrorCodes.HTTP_ERROR


@respx.mock
async def test_malformed_body_maps_to_invalid_response() -> None:
    respx.get(f"{BASE_URL}/status").mock(return_value=httpx.Response(200, text="<html>"))
    with pytest.raises(QuotaClientError) as exc_info:
        await make_client().status()
    assert exc_info.value.code == QuotaClientErrorCodes.INVALID_RESPONSE


@respx.mock
async def test_unknown_state_maps_to_invalid_response() -> None:
    respx.post(f"{BASE_URL}/consume").mock(
        return_value=httpx.Response(200, json={**RECORD, "state": "closed"})
    )
    with pytest.raises(QuotaClientError) as exc_info:
        await make_client().consume("2024-01-01", 3, "x")
    assert exc_info.value.code == QuotaClientErrorCodes.INVALID_RESPONSE


async def test_timeout_maps_to_timeout() -> None:
    with respx.mock:
        respx.post(f"{BASE_URL}/consume").mock(side_effect=httpx.ReadTimeout("slow"))
        with pytest.raises(QuotaClientError) as exc_info:
            await make_client().consume("2024-01-01", 3, "x")
    assert exc_info.value.code == QuotaClientErrorCodes.TIMEOUT


async def test_network_error_is_not_retried() -> None:
    with respx.mock:
        route = respx.post(f"{BASE_URL}/consume").mock(
            side_effect=httpx.ConnectError("Connection refused")
        )
        with pytest.raises(QuotaClientError) as exc_info:
            await make_client().consume("2024-01-01", 3, "x")
    assert exc_info.value.code == QuotaClientErrorCodes.HTTP_ERROR
    assert route.call_count == 1

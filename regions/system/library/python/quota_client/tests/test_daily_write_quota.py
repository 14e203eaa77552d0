"""DailyWriteQuota tests."""

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from renrakun_quota_client import (
    DailyWriteQuota,
    HttpQuotaGateClient,
    LocalQuotaGateClient,
    QuotaClientConfig,
    QuotaClientError,
    QuotaClientErrorCodes,
    QuotaGateClient,
    QuotaSnapshot,
)
from renrakun_quota_gate import InMemoryStorage, QuotaGate, QuotaState, StorageError, create_app


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FailingClient(QuotaGateClient):
    async def consume(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot:
        raise QuotaClientError(QuotaClientErrorCodes.TIMEOUT, "gate call timed out")

    async def force_reset(self, day_key: str, limit: int, resume_at: str) -> QuotaSnapshot:
        raise QuotaClientError(QuotaClientErrorCodes.HTTP_ERROR, "gate unreachable")

    async def status(self) -> QuotaSnapshot:
        raise QuotaClientError(QuotaClientErrorCodes.HTTP_ERROR, "gate unreachable")


class BrokenStorage(InMemoryStorage):
    async def put(self, key: str, value: object) -> None:
        raise StorageError("disk full")


def make_quota(limit: int = 3, now: datetime | None = None) -> tuple[DailyWriteQuota, FixedClock]:
    clock = FixedClock(now or datetime(2024, 1, 1, 3, 0, tzinfo=timezone.utc))
    gate = QuotaGate(InMemoryStorage())
    return DailyWriteQuota(LocalQuotaGateClient(gate), limit=limit, clock=clock), clock


async def test_check_allows_until_limit_then_rejects() -> None:
    quota, _ = make_quota(limit=2)
    first = await quota.check_daily_write_quota()
    second = await quota.check_daily_write_quota()
    third = await quota.check_daily_write_quota()
    assert first.allowed and second.allowed
    assert third.allowed is False
    assert third.resume_at == "2024-01-01T15:00:00.000Z"
    assert third.snapshot.count == 2
    assert third.snapshot.state == QuotaState.PAUSED


async def test_check_uses_jst_day_key() -> None:
    quota, clock = make_quota(limit=1)
    clock.now = datetime(2024, 1, 1, 15, 30, tzinfo=timezone.utc)
    decision = await quota.check_daily_write_quota()
    assert decision.snapshot.day_key == "2024-01-02"
    assert decision.resume_at == "2024-01-02T15:00:00.000Z"


async def test_rollover_at_midnight_reopens() -> None:
    quota, clock = make_quota(limit=1)
    await quota.check_daily_write_quota()
    assert (await quota.check_daily_write_quota()).allowed is False
    clock.now = clock.now + timedelta(days=1)
    decision = await quota.check_daily_write_quota()
    assert decision.allowed is True
    assert decision.snapshot.count == 1


async def test_concurrent_checks_never_exceed_limit() -> None:
    quota, _ = make_quota(limit=5)
    decisions = await asyncio.gather(*(quota.check_daily_write_quota() for _ in range(12)))
    assert sum(d.allowed for d in decisions) == 5
    status = await quota.get_quota_status()
    assert status.count == 5


async def test_status_defaults_when_gate_empty() -> None:
    quota, _ = make_quota(limit=300)
    status = await quota.get_quota_status()
    assert status.day_key == "2024-01-01"
    assert status.state == QuotaState.OPEN
    assert status.count == 0
    assert status.limit == 300
    assert status.resume_at == "2024-01-01T15:00:00.000Z"


async def test_status_does_not_consume() -> None:
    quota, _ = make_quota(limit=2)
    await quota.check_daily_write_quota()
    for _ in range(5):
        await quota.get_quota_status()
    assert (await quota.check_daily_write_quota()).allowed is True
    assert (await quota.get_quota_status()).count == 2


async def test_reset_reopens_paused_window() -> None:
    quota, _ = make_quota(limit=1)
    await quota.check_daily_write_quota()
    await quota.check_daily_write_quota()
    snapshot = await quota.reset_daily_quota()
    assert snapshot.count == 0
    assert snapshot.state == QuotaState.OPEN
    assert (await quota.check_daily_write_quota()).allowed is True


async def test_gate_failure_fails_closed() -> None:
    quota = DailyWriteQuota(FailingClient(), limit=3)
    with pytest.raises(QuotaClientError) as exc_info:
        await quota.check_daily_write_quota()
    assert exc_info.value.code == QuotaClientErrorCodes.TIMEOUT
    with pytest.raises(QuotaClientError):
        await quota.get_quota_status()


async def test_local_storage_failure_fails_closed() -> None:
    quota = DailyWriteQuota(LocalQuotaGateClient(QuotaGate(BrokenStorage())), limit=3)
    with pytest.raises(QuotaClientError) as exc_info:
        await quota.check_daily_write_quota()
    assert exc_info.value.code == QuotaClientErrorCodes.GATE_ERROR


def test_non_positive_limit_rejected() -> None:
    with pytest.raises(ValueError):
        DailyWriteQuota(FailingClient(), limit=0)


async def test_over_http_against_gate_app() -> None:
    gate = QuotaGate(InMemoryStorage())
    transport = httpx.ASGITransport(app=create_app(gate))
    client = HttpQuotaGateClient(QuotaClientConfig(server_url="http://quota"), transport=transport)
    clock = FixedClock(datetime(2024, 1, 1, 3, 0, tzinfo=timezone.utc))
    quota = DailyWriteQuota(client, limit=2, clock=clock)

    assert (await quota.get_quota_status()).limit == 2
    decisions = [await quota.check_daily_write_quota() for _ in range(3)]
    assert [d.allowed for d in decisions] == [True, True, False]
    status = await quota.get_quota_status()
    assert status.to_response() == {
        "state": "paused",
        "resumeAt": "2024-01-01T15:00:00.000Z",
        "count": 2,
        "limit": 2,
    }
    await quota.reset_daily_quota()
    assert (await quota.check_daily_write_quota()).allowed is True

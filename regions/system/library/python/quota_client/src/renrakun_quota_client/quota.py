"""Daily write quota as used by request handlers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

import structlog
from renrakun_quota_gate import QuotaState

from .clock import day_key, next_midnight_iso
from .client import QuotaGateClient
from .exceptions import QuotaClientError
from .model import QuotaDecision, QuotaSnapshot

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DailyWriteQuota:
    """Consults the gate before every write. Nothing is cached locally.

    Gate failures propagate as QuotaClientError (fail-closed): a write whose
    quota check did not complete is rejected, never allowed.
    """

    def __init__(
        self,
        client: QuotaGateClient,
        limit: int,
        tz: tzinfo | str = "Asia/Tokyo",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self._client = client
        self._limit = limit
        self._tz = ZoneInfo(tz) if isinstance(tz, str) else tz
        self._clock = clock

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return self._clock()

    def window(self) -> tuple[str, str]:
        """(dayKey, resumeAt) for the current instant."""
        now = self._clock()
        return day_key(now, self._tz), next_midnight_iso(now, self._tz)

    async def check_daily_write_quota(self) -> QuotaDecision:
        """Consume one write; the decision says whether the write may proceed."""
        key, resume_at = self.window()
        try:
            snapshot = await self._client.consume(key, self._limit, resume_at)
        except QuotaClientError as e:
            logger.error("quota_check_failed", day_key=key, code=e.code, error=str(e))
            raise
        if snapshot.state == QuotaState.PAUSED:
            logger.info(
                "write_rejected_quota_paused",
                day_key=key,
                count=snapshot.count,
                limit=snapshot.limit,
            )
            return QuotaDecision(
                allowed=False,
                resume_at=snapshot.resume_at or resume_at,
                snapshot=snapshot,
            )
        return QuotaDecision(allowed=True, resume_at=snapshot.resume_at or resume_at, snapshot=snapshot)

    async def get_quota_status(self) -> QuotaSnapshot:
        """Read-only status; an uninitialized gate reports today's defaults."""
        snapshot = await self._client.status()
        if snapshot.is_empty:
            key, resume_at = self.window()
            return QuotaSnapshot(
                day_key=key,
                state=QuotaState.OPEN,
                count=0,
                limit=self._limit,
                resume_at=resume_at,
            )
        return snapshot

    async def reset_daily_quota(self) -> QuotaSnapshot:
        key, resume_at = self.window()
        snapshot = await self._client.force_reset(key, self._limit, resume_at)
        logger.info("quota_reset_requested", day_key=key, limit=self._limit)
        return snapshot

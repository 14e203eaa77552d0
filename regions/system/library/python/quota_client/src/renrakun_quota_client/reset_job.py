"""Scheduled daily force-reset."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

from .clock import next_midnight
from .exceptions import QuotaClientError
from .model import QuotaSnapshot
from .quota import DailyWriteQuota

logger = structlog.get_logger(__name__)

# Wake slightly after the boundary so the new dayKey is already in effect.
_BOUNDARY_GRACE_SECONDS = 1.0


@dataclass
class RetryConfig:
    """Backoff for reset attempts. Resets are idempotent, so retrying is safe."""

    max_attempts: int = 5
    initial_delay: float = 1.0
    max_delay: float = 60.0
    multiplier: float = 2.0
    jitter: bool = True

    def compute_delay(self, attempt: int) -> float:
        base = self.initial_delay * (self.multiplier**attempt)
        capped = min(base, self.max_delay)
        if self.jitter:
            return capped * (0.9 + random.random() * 0.2)
        return capped


class DailyResetJob:
    """Calls reset_daily_quota() once per local midnight.

    This is the safety net next to the lazy rollover in consume; both paths
    end up in the same serialized gate.
    """

    def __init__(
        self,
        quota: DailyWriteQuota,
        retry: RetryConfig | None = None,
        offset_seconds: float = 0.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._quota = quota
        self._retry = retry or RetryConfig()
        if self._retry.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._offset = offset_seconds
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None

    def seconds_until_next_run(self) -> float:
        now = self._quota.now()
        target = next_midnight(now, self._quota.timezone)
        return max(0.0, (target - now).total_seconds() + _BOUNDARY_GRACE_SECONDS + self._offset)

    async def run_once(self) -> QuotaSnapshot:
        """Reset with retries; re-raises the last error once attempts run out."""
        attempt = 0
        while True:
            try:
                snapshot = await self._quota.reset_daily_quota()
            except QuotaClientError as e:
                attempt += 1
                logger.warning(
                    "quota_reset_failed",
                    attempt=attempt,
                    max_attempts=self._retry.max_attempts,
                    code=e.code,
                    error=str(e),
                )
                if attempt >= self._retry.max_attempts:
                    raise
                await self._sleep(self._retry.compute_delay(attempt - 1))
            else:
                logger.info("quota_reset_done", day_key=snapshot.day_key, attempt=attempt + 1)
                return snapshot

    async def run_forever(self) -> None:
        while True:
            delay = self.seconds_until_next_run()
            logger.debug("quota_reset_scheduled", in_seconds=round(delay, 3))
            await self._sleep(delay)
            try:
                await self.run_once()
            except QuotaClientError as e:
                logger.error("quota_reset_gave_up", code=e.code, error=str(e))
            except Exception:
                # Unexpected failures wait for the next midnight too.
                logger.exception("quota_reset_crashed")

    def start(self) -> asyncio.Task[None]:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run_forever(), name="daily-quota-reset")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

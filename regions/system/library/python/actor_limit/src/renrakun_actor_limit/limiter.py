"""Per-actor daily create/join limiter."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

import structlog
from renrakun_quota_client import day_key, to_iso
from renrakun_telemetry.metrics import actor_limit_rejections_total

from .exceptions import ActorLimitError
from .store import ActorLimitStore
from .types import ActorLimitResult

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActorLimiter:
    """Counts create/join hits per actor per local day.

    A limit <= 0 disables the limiter: every hit is allowed and nothing is
    stored.
    """

    def __init__(
        self,
        store: ActorLimitStore,
        limit: int = 40,
        tz: tzinfo | str = "Asia/Tokyo",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._limit = limit
        self._tz = ZoneInfo(tz) if isinstance(tz, str) else tz
        self._clock = clock

    @property
    def enabled(self) -> bool:
        return self._limit > 0

    @property
    def limit(self) -> int:
        return self._limit

    async def hit(self, actor_key: str) -> ActorLimitResult:
        """Count one hit; the result is disallowed once the count passes the limit."""
        now = self._clock()
        today = day_key(now, self._tz)
        if not self.enabled:
            return ActorLimitResult(actor_key, today, 0, self._limit, allowed=True)

        stored_day, count = await self._store.increment(actor_key, today, to_iso(now))
        allowed = stored_day != today or count <= self._limit
        if not allowed:
            actor_limit_rejections_total.add(1)
            logger.info(
                "actor_limit_exceeded",
                actor_key=actor_key,
                day_key=today,
                count=count,
                limit=self._limit,
            )
        return ActorLimitResult(actor_key, today, count, self._limit, allowed)

    async def enforce(self, actor_key: str) -> ActorLimitResult:
        """hit(), raising ActorLimitError when the actor is over its limit."""
        result = await self.hit(actor_key)
        if not result.allowed:
            raise ActorLimitError(
                "Too many create/join requests for today",
                actor_key=actor_key,
            )
        return result

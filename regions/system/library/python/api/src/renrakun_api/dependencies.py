"""FastAPI dependencies guarding write routes."""

from __future__ import annotations

from fastapi import Request
from renrakun_actor_limit import ActorLimiter, ActorLimitResult, join_create_actor_key
from renrakun_quota_client import DailyWriteQuota, QuotaDecision, QuotaExceededError


def get_quota(request: Request) -> DailyWriteQuota:
    return request.app.state.quota


def get_actor_limiter(request: Request) -> ActorLimiter:
    return request.app.state.actor_limiter


async def require_write_quota(request: Request) -> QuotaDecision:
    """Consume one unit of today's write budget or reject the request with 503.

    Gate failures surface as QuotaClientError and become a 500.
    """
    decision = await get_quota(request).check_daily_write_quota()
    if not decision.allowed:
        raise QuotaExceededError(decision.resume_at)
    return decision


async def require_actor_limit(request: Request) -> ActorLimitResult:
    """Count a create/join hit for the calling address; 429 once over the limit."""
    limiter = get_actor_limiter(request)
    return await limiter.enforce(join_create_actor_key(request.headers))

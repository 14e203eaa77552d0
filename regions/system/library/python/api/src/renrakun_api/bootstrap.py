"""Build API components from AppConfig."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from fastapi import FastAPI
from renrakun_actor_limit import ActorLimiter, SqliteActorLimitStore
from renrakun_config import AppConfig
from renrakun_quota_client import (
    DailyResetJob,
    DailyWriteQuota,
    HttpQuotaGateClient,
    QuotaClientConfig,
    RetryConfig,
)

from .app import create_app


@dataclass
class ApiComponents:
    quota: DailyWriteQuota
    actor_limiter: ActorLimiter
    reset_job: DailyResetJob


def build_components(config: AppConfig) -> ApiComponents:
    client = HttpQuotaGateClient(
        QuotaClientConfig(
            server_url=config.quota.gate_url,
            timeout=timedelta(seconds=config.quota.timeout_seconds),
        )
    )
    quota = DailyWriteQuota(
        client,
        limit=config.quota.daily_write_limit,
        tz=config.quota.timezone,
    )
    limiter = ActorLimiter(
        SqliteActorLimitStore(config.actor_limit.database_path),
        limit=config.actor_limit.daily_join_create_limit_per_actor,
        tz=config.quota.timezone,
    )
    reset_job = DailyResetJob(
        quota,
        retry=RetryConfig(max_attempts=config.quota.reset_max_attempts),
        offset_seconds=config.quota.reset_offset_seconds,
    )
    return ApiComponents(quota=quota, actor_limiter=limiter, reset_job=reset_job)


def build_app(config: AppConfig) -> FastAPI:
    components = build_components(config)
    return create_app(
        components.quota,
        components.actor_limiter,
        reset_job=components.reset_job,
        app_origin=config.cors.app_origin,
    )

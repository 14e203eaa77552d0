"""renrakun quota client library."""

from .client import HttpQuotaGateClient, LocalQuotaGateClient, QuotaGateClient
from .clock import JST, day_key, next_midnight, next_midnight_iso, now_iso, to_iso
from .config import QuotaClientConfig
from .exceptions import QuotaClientError, QuotaClientErrorCodes, QuotaExceededError
from .model import QuotaDecision, QuotaSnapshot
from .quota import DailyWriteQuota
from .reset_job import DailyResetJob, RetryConfig

__all__ = [
    "DailyResetJob",
    "DailyWriteQuota",
    "HttpQuotaGateClient",
    "JST",
    "LocalQuotaGateClient",
    "QuotaClientConfig",
    "QuotaClientError",
    "QuotaClientErrorCodes",
    "QuotaDecision",
    "QuotaExceededError",
    "QuotaGateClient",
    "QuotaSnapshot",
    "RetryConfig",
    "day_key",
    "next_midnight",
    "next_midnight_iso",
    "now_iso",
    "to_iso",
]

"""renrakun telemetry library."""

from .logger import new_logger
from .metrics import (
    actor_limit_rejections_total,
    quota_consume_total,
    quota_gate_errors_total,
    quota_reset_total,
)

__all__ = [
    "new_logger",
    "quota_consume_total",
    "quota_reset_total",
    "quota_gate_errors_total",
    "actor_limit_rejections_total",
]

"""OpenTelemetry クォータメトリクス定義"""

from __future__ import annotations

from opentelemetry import metrics

_meter = metrics.get_meter("renrakun.quota", version="0.1.0")

quota_consume_total = _meter.create_counter(
    name="quota_consume_total",
    description="Consume calls answered by the quota gate, by resulting state",
    unit="1",
)

quota_reset_total = _meter.create_counter(
    name="quota_reset_total",
    description="Forced resets applied by the quota gate",
    unit="1",
)

quota_gate_errors_total = _meter.create_counter(
    name="quota_gate_errors_total",
    description="Quota gate failures, by error code",
    unit="1",
)

actor_limit_rejections_total = _meter.create_counter(
    name="actor_limit_rejections_total",
    description="Create/join requests rejected by the per-actor limiter",
    unit="1",
)

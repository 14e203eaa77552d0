"""Quota client models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from renrakun_quota_gate import QuotaRecord, QuotaState


@dataclass(frozen=True)
class QuotaSnapshot:
    """Gate record as seen by a caller.

    ``day_key`` and ``resume_at`` are None when the gate has never been
    written to.
    """

    day_key: str | None
    state: QuotaState
    count: int
    limit: int
    resume_at: str | None

    @property
    def is_empty(self) -> bool:
        return not self.day_key or not self.resume_at or not self.limit

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuotaSnapshot:
        """Build from a gate response body. Raises ValueError/KeyError/TypeError on bad input."""
        return cls(
            day_key=data.get("dayKey"),
            state=QuotaState(data["state"]),
            count=int(data.get("count") or 0),
            limit=int(data.get("limit") or 0),
            resume_at=data.get("resumeAt"),
        )

    @classmethod
    def from_record(cls, record: QuotaRecord) -> QuotaSnapshot:
        return cls(
            day_key=record.day_key,
            state=record.state,
            count=record.count,
            limit=record.limit,
            resume_at=record.resume_at,
        )

    def to_response(self) -> dict[str, Any]:
        """Client-facing status body."""
        return {
            "state": self.state.value,
            "resumeAt": self.resume_at,
            "count": self.count,
            "limit": self.limit,
        }


@dataclass(frozen=True)
class QuotaDecision:
    """Outcome of a write-quota check."""

    allowed: bool
    resume_at: str
    snapshot: QuotaSnapshot

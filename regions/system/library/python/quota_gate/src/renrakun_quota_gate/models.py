"""Quota gate data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class QuotaState(str, Enum):
    """Window state."""

    OPEN = "open"
    PAUSED = "paused"


@dataclass(frozen=True)
class QuotaRecord:
    """The single persisted record of a gate instance."""

    day_key: str
    count: int
    limit: int
    state: QuotaState
    resume_at: str

    @property
    def paused(self) -> bool:
        return self.state == QuotaState.PAUSED

    def to_dict(self) -> dict[str, Any]:
        """Wire/storage form (camelCase)."""
        return {
            "dayKey": self.day_key,
            "count": self.count,
            "limit": self.limit,
            "state": self.state.value,
            "resumeAt": self.resume_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuotaRecord:
        return cls(
            day_key=data["dayKey"],
            count=int(data.get("count", 0)),
            limit=int(data["limit"]),
            state=QuotaState(data.get("state", "open")),
            resume_at=data["resumeAt"],
        )


# Rendered by the transport when status() finds no record.
EMPTY_STATUS: dict[str, Any] = {
    "dayKey": None,
    "count": 0,
    "limit": 0,
    "state": QuotaState.OPEN.value,
    "resumeAt": None,
}


class WindowInput(BaseModel):
    """Validated consume/force-reset arguments."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    day_key: StrictStr = Field(alias="dayKey", min_length=1)
    limit: StrictInt = Field(gt=0)
    resume_at: StrictStr = Field(alias="resumeAt", min_length=1)

    def fresh_record(self) -> QuotaRecord:
        """A new open window with a zero count."""
        return QuotaRecord(
            day_key=self.day_key,
            count=0,
            limit=self.limit,
            state=QuotaState.OPEN,
            resume_at=self.resume_at,
        )

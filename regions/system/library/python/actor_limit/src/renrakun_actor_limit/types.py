"""Actor limit types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ActorLimitResult:
    """Outcome of one create/join hit for an actor."""

    actor_key: str
    day_key: str
    count: int
    limit: int
    allowed: bool

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)

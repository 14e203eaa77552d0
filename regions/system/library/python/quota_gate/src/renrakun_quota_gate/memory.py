"""InMemoryStorage implementation."""

from __future__ import annotations

import copy
from typing import Any

from .store import DurableStorage


class InMemoryStorage(DurableStorage):
    """In-memory storage for tests and single-process use.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the stored copy.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        value = self._values.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def put(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    def __len__(self) -> int:
        return len(self._values)

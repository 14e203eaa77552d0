"""DurableStorage abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DurableStorage(ABC):
    """Key-value storage scoped to a single gate instance."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    async def put(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under key."""
        ...

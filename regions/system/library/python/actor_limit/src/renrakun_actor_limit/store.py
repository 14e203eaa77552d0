"""Actor counter stores."""

from __future__ import annotations

import asyncio
import sqlite3
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from .exceptions import ActorLimitStoreError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS daily_actor_limits (
    actor_key TEXT PRIMARY KEY,
    day_key TEXT NOT NULL,
    count INTEGER NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_UPSERT = """
INSERT INTO daily_actor_limits (actor_key, day_key, count, updated_at)
VALUES (?, ?, 1, ?)
ON CONFLICT(actor_key) DO UPDATE SET
  day_key = CASE
    WHEN daily_actor_limits.day_key = excluded.day_key THEN daily_actor_limits.day_key
    ELSE excluded.day_key
  END,
  count = CASE
    WHEN daily_actor_limits.day_key = excluded.day_key THEN daily_actor_limits.count + 1
    ELSE 1
  END,
  updated_at = excluded.updated_at
"""


class ActorLimitStore(ABC):
    """Per-actor daily counter."""

    @abstractmethod
    async def increment(self, actor_key: str, day_key: str, updated_at: str) -> tuple[str, int]:
        """Count one hit and return the stored ``(day_key, count)``.

        A hit on a new day_key restarts the count at 1.
        """


class InMemoryActorLimitStore(ActorLimitStore):
    """In-memory store for testing."""

    def __init__(self) -> None:
        self._rows: dict[str, tuple[str, int, str]] = {}

    async def increment(self, actor_key: str, day_key: str, updated_at: str) -> tuple[str, int]:
        current = self._rows.get(actor_key)
        count = current[1] + 1 if current is not None and current[0] == day_key else 1
        self._rows[actor_key] = (day_key, count, updated_at)
        return day_key, count

    def get_count(self, actor_key: str) -> int:
        """Stored count for an actor. For testing."""
        row = self._rows.get(actor_key)
        return row[1] if row is not None else 0


class SqliteActorLimitStore(ActorLimitStore):
    """``daily_actor_limits`` table in a SQLite file.

    The increment and the read back are separate statements; concurrent hits
    may both see the higher count, which only errs on the strict side.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._mutex = threading.Lock()
        try:
            self._conn = sqlite3.connect(self._path, check_same_thread=False)
            with self._conn:
                self._conn.execute(_SCHEMA)
        except sqlite3.Error as e:
            raise ActorLimitStoreError(f"Failed to open actor limit store: {self._path}", cause=e) from e

    def _increment(self, actor_key: str, day_key: str, updated_at: str) -> tuple[str, int]:
        with self._mutex:
            with self._conn:
                self._conn.execute(_UPSERT, (actor_key, day_key, updated_at))
            row = self._conn.execute(
                "SELECT day_key, count FROM daily_actor_limits WHERE actor_key = ?",
                (actor_key,),
            ).fetchone()
        if row is None:
            raise ActorLimitStoreError(f"Counter row missing for {actor_key!r}")
        return str(row[0]), int(row[1])

    async def increment(self, actor_key: str, day_key: str, updated_at: str) -> tuple[str, int]:
        try:
            return await asyncio.to_thread(self._increment, actor_key, day_key, updated_at)
        except sqlite3.Error as e:
            raise ActorLimitStoreError(f"Failed to count hit for {actor_key!r}", cause=e) from e

    def close(self) -> None:
        with self._mutex:
            self._conn.close()

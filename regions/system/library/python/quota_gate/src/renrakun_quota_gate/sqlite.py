"""SQLite-backed durable storage."""

from __future__ import annotations

import asyncio
import json
import sqlite3
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .exceptions import StorageError
from .store import DurableStorage

_SCHEMA = """
CREATE TABLE IF NOT EXISTS gate_storage (
    scope TEXT NOT NULL,
    key TEXT NOT NULL,
    value TEXT NOT NULL,
    PRIMARY KEY (scope, key)
)
"""


class SqliteStorage(DurableStorage):
    """Durable storage in a SQLite file.

    Rows are keyed by ``(scope, key)`` so several gate instances can share one
    file. Blocking sqlite calls run in a worker thread.
    """

    def __init__(self, path: str | Path, scope: str) -> None:
        self._path = str(path)
        self._scope = scope
        self._mutex = threading.Lock()
        try:
            self._conn = sqlite3.connect(self._path, check_same_thread=False)
            with self._conn:
                self._conn.execute(_SCHEMA)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open storage: {self._path}", cause=e) from e

    @property
    def scope(self) -> str:
        return self._scope

    @classmethod
    def factory(cls, path: str | Path) -> Callable[[str], SqliteStorage]:
        """Return a storage factory for QuotaGateNamespace."""
        return lambda scope: cls(path, scope)

    def _get(self, key: str) -> Any | None:
        with self._mutex:
            row = self._conn.execute(
                "SELECT value FROM gate_storage WHERE scope = ? AND key = ?",
                (self._scope, key),
            ).fetchone()
        return json.loads(row[0]) if row is not None else None

    def _put(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self._mutex, self._conn:
            self._conn.execute(
                """
                INSERT INTO gate_storage (scope, key, value)
                VALUES (?, ?, ?)
                ON CONFLICT(scope, key) DO UPDATE SET value = excluded.value
                """,
                (self._scope, key, payload),
            )

    async def get(self, key: str) -> Any | None:
        try:
            return await asyncio.to_thread(self._get, key)
        except (sqlite3.Error, ValueError) as e:
            raise StorageError(f"Failed to read {key!r}", cause=e) from e

    async def put(self, key: str, value: Any) -> None:
        try:
            await asyncio.to_thread(self._put, key, value)
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {key!r}", cause=e) from e

    def close(self) -> None:
        with self._mutex:
            self._conn.close()

"""Quota gate actor."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any

import structlog
from pydantic import ValidationError
from renrakun_telemetry.metrics import quota_consume_total, quota_reset_total

from .exceptions import InvalidPayloadError, QuotaGateErrorCodes, StorageError
from .models import QuotaRecord, QuotaState, WindowInput
from .store import DurableStorage

STORAGE_KEY = "quota-state"

logger = structlog.get_logger(__name__)


def _validate(day_key: Any, limit: Any, resume_at: Any, code: str) -> WindowInput:
    try:
        return WindowInput.model_validate(
            {"dayKey": day_key, "limit": limit, "resumeAt": resume_at}
        )
    except ValidationError as e:
        raise InvalidPayloadError(
            code=code,
            message=f"Invalid payload: {e.error_count()} validation error(s)",
            cause=e,
        ) from e


class QuotaGate:
    """Serialized owner of one QuotaRecord.

    Every operation runs under a FIFO ``asyncio.Lock``, so calls are applied
    one at a time in arrival order and a queued call only observes the record
    after the previous call's storage write has completed. The record is read
    from storage on first access and written back after every mutation; the
    in-memory copy is only replaced once the write succeeded.
    """

    def __init__(self, storage: DurableStorage, name: str = "global") -> None:
        self._storage = storage
        self._name = name
        self._lock = asyncio.Lock()
        self._record: QuotaRecord | None = None
        self._loaded = False

    @property
    def name(self) -> str:
        return self._name

    async def _load(self) -> QuotaRecord | None:
        if not self._loaded:
            data = await self._storage.get(STORAGE_KEY)
            try:
                self._record = QuotaRecord.from_dict(data) if data is not None else None
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise StorageError("Stored quota record is malformed", cause=e) from e
            self._loaded = True
        return self._record

    async def _store(self, record: QuotaRecord) -> QuotaRecord:
        await self._storage.put(STORAGE_KEY, record.to_dict())
        self._record = record
        return record

    def _ensure_window(self, current: QuotaRecord | None, window: WindowInput) -> QuotaRecord:
        if current is None or current.day_key != window.day_key:
            if current is not None and window.day_key < current.day_key:
                logger.warning(
                    "quota_day_key_regressed",
                    gate=self._name,
                    stored_day_key=current.day_key,
                    incoming_day_key=window.day_key,
                )
            logger.info(
                "quota_window_started",
                gate=self._name,
                day_key=window.day_key,
                limit=window.limit,
            )
            return window.fresh_record()
        return replace(current, limit=window.limit, resume_at=window.resume_at)

    async def consume(self, day_key: str, limit: int, resume_at: str) -> QuotaRecord:
        """Consume one write from today's budget.

        Returns the updated record. A record in the ``paused`` state means
        the write was rejected; its count is left unchanged.
        """
        window = _validate(day_key, limit, resume_at, QuotaGateErrorCodes.INVALID_CONSUME_PAYLOAD)
        async with self._lock:
            record = self._ensure_window(await self._load(), window)

            # A paused record is persisted as-is to keep limit/resumeAt current.
            if record.state == QuotaState.PAUSED:
                stored = await self._store(record)
            elif record.count + 1 > record.limit:
                stored = await self._store(replace(record, state=QuotaState.PAUSED))
                logger.warning(
                    "quota_paused",
                    gate=self._name,
                    day_key=stored.day_key,
                    count=stored.count,
                    limit=stored.limit,
                    resume_at=stored.resume_at,
                )
            else:
                stored = await self._store(replace(record, count=record.count + 1))
        quota_consume_total.add(1, {"gate": self._name, "state": stored.state.value})
        return stored

    async def force_reset(self, day_key: str, limit: int, resume_at: str) -> QuotaRecord:
        """Replace the record with a fresh open window, whatever its state."""
        window = _validate(day_key, limit, resume_at, QuotaGateErrorCodes.INVALID_RESET_PAYLOAD)
        async with self._lock:
            stored = await self._store(window.fresh_record())
        logger.info("quota_force_reset", gate=self._name, day_key=stored.day_key, limit=stored.limit)
        quota_reset_total.add(1, {"gate": self._name})
        return stored

    async def status(self) -> QuotaRecord | None:
        """Current record, or None if nothing has been written yet."""
        async with self._lock:
            return await self._load()

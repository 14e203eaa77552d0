"""Day-boundary helpers for the reference timezone."""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

JST = ZoneInfo("Asia/Tokyo")


def _resolve(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    return now


def to_iso(value: datetime) -> str:
    """UTC ISO-8601 with milliseconds, e.g. ``2024-01-01T15:00:00.000Z``."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def day_key(now: datetime | None = None, tz: tzinfo = JST) -> str:
    """``YYYY-MM-DD`` of now in tz."""
    return _resolve(now).astimezone(tz).strftime("%Y-%m-%d")


def next_midnight(now: datetime | None = None, tz: tzinfo = JST) -> datetime:
    """Start of the next local day in tz."""
    local = _resolve(now).astimezone(tz)
    return datetime.combine(local.date() + timedelta(days=1), time.min, tzinfo=tz)


def next_midnight_iso(now: datetime | None = None, tz: tzinfo = JST) -> str:
    return to_iso(next_midnight(now, tz))


def now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))

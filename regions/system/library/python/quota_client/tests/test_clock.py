"""Day-boundary helper tests."""

from datetime import datetime, timezone

import pytest
from renrakun_quota_client import day_key, next_midnight, next_midnight_iso, now_iso, to_iso


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_day_key_before_jst_midnight() -> None:
    assert day_key(utc(2024, 1, 1, 14, 59, 59)) == "2024-01-01"
    assert next_midnight_iso(utc(2024, 1, 1, 14, 59, 59)) == "2024-01-01T15:00:00.000Z"


def test_day_key_at_jst_midnight() -> None:
    assert day_key(utc(2024, 1, 1, 15, 0, 0)) == "2024-01-02"
    assert next_midnight_iso(utc(2024, 1, 1, 15, 0, 0)) == "2024-01-02T15:00:00.000Z"


def test_month_and_year_rollover() -> None:
    assert day_key(utc(2024, 1, 31, 16, 0)) == "2024-02-01"
    assert next_midnight_iso(utc(2024, 12, 31, 10, 0)) == "2024-12-31T15:00:00.000Z"
    assert day_key(utc(2024, 12, 31, 15, 0)) == "2025-01-01"


def test_other_timezone() -> None:
    now = utc(2024, 1, 1, 23, 30)
    assert day_key(now, timezone.utc) == "2024-01-01"
    assert next_midnight(now, timezone.utc) == utc(2024, 1, 2)


def test_naive_datetime_rejected() -> None:
    with pytest.raises(ValueError):
        day_key(datetime(2024, 1, 1))


def test_iso_format() -> None:
    assert to_iso(utc(2024, 1, 1, 15, 0, 0)) == "2024-01-01T15:00:00.000Z"
    assert now_iso().endswith("Z")
    assert len(now_iso()) == len("2024-01-01T15:00:00.000Z")

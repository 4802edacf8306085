"""Clock and day-granularity helpers shared by the domain."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Return ``value`` in UTC, rejecting naive timestamps."""

    if value.tzinfo is None:
        raise ValueError("Timestamps must include timezone information")
    return value.astimezone(UTC)


def as_day(value: date | datetime) -> date:
    """Truncate ``value`` to its calendar day."""

    if isinstance(value, datetime):
        return value.date()
    return value


def day_key(value: date | datetime) -> str:
    return as_day(value).isoformat()


__all__ = ["Clock", "as_day", "day_key", "ensure_aware", "utcnow"]

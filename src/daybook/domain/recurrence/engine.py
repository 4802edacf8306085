"""Expand recurrence patterns into calendar days.

Occurrence ``k`` falls at ``base + k * interval`` units of the pattern's frequency,
always measured from the base day so month/year clamping never accumulates
(Jan 31 monthly gives Feb 28/29, then Mar 31). ``relativedelta`` provides the
clamping. All arithmetic is at day granularity; datetimes are truncated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from dateutil.relativedelta import relativedelta

from daybook.domain.dates import as_day
from daybook.domain.model import EndDate, Frequency, MaxOccurrences, RecurrencePattern

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import date, datetime


def _offset(pattern: RecurrencePattern, index: int) -> relativedelta:
    amount = index * pattern.interval
    match pattern.frequency:
        case Frequency.DAILY:
            return relativedelta(days=amount)
        case Frequency.WEEKLY:
            return relativedelta(weeks=amount)
        case Frequency.MONTHLY:
            return relativedelta(months=amount)
        case Frequency.YEARLY:
            return relativedelta(years=amount)
        case _:
            raise ValueError(f"Pattern with frequency {pattern.frequency} does not repeat")


def occurrence_at(pattern: RecurrencePattern, base: date, index: int) -> date:
    """Return occurrence number ``index`` (zero-based) ignoring the end condition."""

    if index < 0:
        raise ValueError(f"Occurrence index must be non-negative, got {index}")
    if index == 0:
        return base
    return base + _offset(pattern, index)


def _within_end(pattern: RecurrencePattern, index: int, day: date) -> bool:
    end = pattern.end
    if isinstance(end, MaxOccurrences):
        return index < end.count
    if isinstance(end, EndDate):
        return day <= end.on
    return True


def _lower_index(pattern: RecurrencePattern, base: date, day: date) -> int:
    """An index whose occurrence does not come after ``day``; a cheap starting point."""

    if day <= base:
        return 0
    match pattern.frequency:
        case Frequency.DAILY:
            units = (day - base).days
        case Frequency.WEEKLY:
            units = (day - base).days // 7
        case Frequency.MONTHLY:
            units = (day.year - base.year) * 12 + day.month - base.month
        case _:
            units = day.year - base.year
    return max(units // pattern.interval - 1, 0)


def _first_index(pattern: RecurrencePattern, base: date, day: date, *, strict: bool) -> int:
    """Smallest index whose occurrence is after ``day`` (``strict``) or on/after it."""

    index = _lower_index(pattern, base, day)
    while True:
        candidate = occurrence_at(pattern, base, index)
        if candidate > day or (not strict and candidate == day):
            return index
        index += 1


def next_occurrence(
    pattern: RecurrencePattern,
    base: date | datetime,
    after: date | datetime,
) -> date | None:
    """Smallest occurrence strictly after ``after``, or ``None`` when exhausted.

    Non-recurring patterns never have a next occurrence.
    """

    if not pattern.is_recurring:
        return None
    base_day = as_day(base)
    index = _first_index(pattern, base_day, as_day(after), strict=True)
    candidate = occurrence_at(pattern, base_day, index)
    if not _within_end(pattern, index, candidate):
        return None
    return candidate


@dataclass(frozen=True, slots=True)
class OccurrenceRange:
    """Occurrences of ``pattern`` within ``[start, end]``.

    Iterating computes dates lazily; each iteration starts over, and the range
    bound keeps it finite even for unbounded patterns.
    """

    pattern: RecurrencePattern
    base: date
    start: date
    end: date

    def __iter__(self) -> Iterator[date]:
        if self.start > self.end:
            return
        if not self.pattern.is_recurring:
            if self.start <= self.base <= self.end:
                yield self.base
            return
        index = _first_index(self.pattern, self.base, self.start, strict=False)
        while True:
            day = occurrence_at(self.pattern, self.base, index)
            if day > self.end or not _within_end(self.pattern, index, day):
                return
            yield day
            index += 1

    def first(self) -> date | None:
        return next(iter(self), None)


def occurrences_in_range(
    pattern: RecurrencePattern,
    base: date | datetime,
    start: date | datetime,
    end: date | datetime,
) -> OccurrenceRange:
    """All occurrence days of ``pattern`` anchored at ``base`` within ``[start, end]``."""

    return OccurrenceRange(pattern=pattern, base=as_day(base), start=as_day(start), end=as_day(end))


def occurs_on(pattern: RecurrencePattern, base: date | datetime, day: date | datetime) -> bool:
    """Whether an occurrence of ``pattern`` lands on calendar ``day``."""

    base_day = as_day(base)
    target = as_day(day)
    if target < base_day:
        return False
    if not pattern.is_recurring:
        return target == base_day
    index = _first_index(pattern, base_day, target, strict=False)
    candidate = occurrence_at(pattern, base_day, index)
    return candidate == target and _within_end(pattern, index, candidate)


def describe(pattern: RecurrencePattern) -> str:
    """Human-readable summary, e.g. ``"Every 2 weeks until 2024-03-01"``."""

    if not pattern.is_recurring:
        return Frequency.NONE.display_name
    if pattern.interval == 1:
        text = pattern.frequency.display_name
    else:
        text = f"Every {pattern.interval} {pattern.frequency.unit}s"
    if pattern.end_date is not None:
        text += f" until {pattern.end_date.isoformat()}"
    elif pattern.max_occurrences is not None:
        text += f" for {pattern.max_occurrences} times"
    return text


__all__ = [
    "OccurrenceRange",
    "describe",
    "next_occurrence",
    "occurrence_at",
    "occurrences_in_range",
    "occurs_on",
]

"""Habit completion queries: toggles, streaks and completion rates."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from daybook.domain.dates import as_day, utcnow
from daybook.domain.model import HabitCompletion

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime
    from uuid import UUID

    from daybook.domain.dates import Clock

DEFAULT_RATE_WINDOW_DAYS = 30


def completion_for(
    completions: Iterable[HabitCompletion],
    habit_id: UUID,
    day: date | datetime,
) -> HabitCompletion | None:
    target = as_day(day)
    return next(
        (entry for entry in completions if entry.habit_id == habit_id and entry.day == target),
        None,
    )


def is_completed(
    completions: Iterable[HabitCompletion],
    habit_id: UUID,
    day: date | datetime,
) -> bool:
    entry = completion_for(completions, habit_id, day)
    return entry is not None and entry.is_completed


def toggle_completion(
    completions: Iterable[HabitCompletion],
    habit_id: UUID,
    day: date | datetime,
    *,
    clock: Clock = utcnow,
) -> tuple[HabitCompletion, bool]:
    """Flip the completion for ``habit_id`` on ``day``.

    Returns the record and whether it was newly created (created records start
    out completed and still need to be added to their collection).
    """

    existing = completion_for(completions, habit_id, day)
    if existing is not None:
        existing.is_completed = not existing.is_completed
        existing.touch(clock=clock)
        return existing, False
    created = HabitCompletion(
        habit_id=habit_id,
        day=as_day(day),
        is_completed=True,
        last_modified=clock(),
    )
    return created, True


def _completed_days(completions: Iterable[HabitCompletion], habit_id: UUID) -> set[date]:
    return {entry.day for entry in completions if entry.habit_id == habit_id and entry.is_completed}


def current_streak(
    completions: Iterable[HabitCompletion],
    habit_id: UUID,
    as_of: date | datetime,
) -> int:
    """Consecutive completed days ending at ``as_of`` (zero if ``as_of`` is open)."""

    done = _completed_days(completions, habit_id)
    cursor = as_day(as_of)
    streak = 0
    while cursor in done:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def completion_rate(
    completions: Iterable[HabitCompletion],
    habit_id: UUID,
    as_of: date | datetime,
    *,
    days: int = DEFAULT_RATE_WINDOW_DAYS,
) -> float:
    """Share of the last ``days`` days (``as_of`` included) that were completed."""

    if days < 1:
        raise ValueError(f"Window must span at least one day, got {days}")
    done = _completed_days(completions, habit_id)
    end = as_day(as_of)
    start = end - timedelta(days=days - 1)
    hits = sum(1 for day in done if start <= day <= end)
    return hits / days


def completions_of(completions: Iterable[HabitCompletion], habit_id: UUID) -> list[HabitCompletion]:
    return [entry for entry in completions if entry.habit_id == habit_id]


__all__ = [
    "DEFAULT_RATE_WINDOW_DAYS",
    "completion_for",
    "completion_rate",
    "completions_of",
    "current_streak",
    "is_completed",
    "toggle_completion",
]

"""Recurrence rule value objects.

The end condition is a tagged union: a pattern carries exactly one of
``Unbounded``, ``EndDate`` or ``MaxOccurrences``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from .enums import Frequency


class InvalidPattern(ValueError):
    """Raised when a recurrence pattern fails validation."""


@dataclass(frozen=True, slots=True)
class Unbounded:
    pass


@dataclass(frozen=True, slots=True)
class EndDate:
    on: date

    def __post_init__(self) -> None:
        if not isinstance(self.on, date):
            raise InvalidPattern(f"End date must be a date, got {self.on!r}")
        if isinstance(self.on, datetime):
            object.__setattr__(self, "on", self.on.date())


@dataclass(frozen=True, slots=True)
class MaxOccurrences:
    count: int

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise InvalidPattern(f"Occurrence count must be an integer, got {self.count!r}")
        if self.count < 1:
            raise InvalidPattern(f"Occurrence count must be at least 1, got {self.count}")


type EndCondition = Unbounded | EndDate | MaxOccurrences

UNBOUNDED = Unbounded()


@dataclass(frozen=True, slots=True)
class RecurrencePattern:
    """Every ``interval`` units of ``frequency``, until ``end``.

    With ``Frequency.NONE`` the pattern is non-recurring and the other fields are
    ignored by the engine.
    """

    frequency: Frequency = Frequency.NONE
    interval: int = 1
    end: EndCondition = field(default=UNBOUNDED)

    def __post_init__(self) -> None:
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise InvalidPattern(f"Interval must be an integer, got {self.interval!r}")
        if self.interval < 1:
            raise InvalidPattern(f"Interval must be at least 1, got {self.interval}")
        if not isinstance(self.end, Unbounded | EndDate | MaxOccurrences):
            raise InvalidPattern(f"Unsupported end condition: {self.end!r}")

    @classmethod
    def from_fields(
        cls,
        frequency: Frequency | str = Frequency.NONE,
        interval: int = 1,
        *,
        end_date: date | None = None,
        max_occurrences: int | None = None,
    ) -> RecurrencePattern:
        """Build a pattern from optional end fields, as stored in records and forms."""

        if end_date is not None and max_occurrences is not None:
            raise InvalidPattern("End date and maximum occurrences are mutually exclusive")
        try:
            resolved_frequency = Frequency(frequency)
        except ValueError as exc:
            raise InvalidPattern(f"Unknown frequency: {frequency!r}") from exc
        end: EndCondition = UNBOUNDED
        if end_date is not None:
            end = EndDate(end_date)
        elif max_occurrences is not None:
            end = MaxOccurrences(max_occurrences)
        return cls(frequency=resolved_frequency, interval=interval, end=end)

    @property
    def is_recurring(self) -> bool:
        return self.frequency is not Frequency.NONE

    @property
    def end_date(self) -> date | None:
        return self.end.on if isinstance(self.end, EndDate) else None

    @property
    def max_occurrences(self) -> int | None:
        return self.end.count if isinstance(self.end, MaxOccurrences) else None


NEVER = RecurrencePattern()

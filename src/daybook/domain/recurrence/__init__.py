"""Recurrence expansion for repeating items."""

from __future__ import annotations

from daybook.domain.model.recurrence import (
    NEVER,
    UNBOUNDED,
    EndCondition,
    EndDate,
    InvalidPattern,
    MaxOccurrences,
    RecurrencePattern,
    Unbounded,
)

from .engine import (
    OccurrenceRange,
    describe,
    next_occurrence,
    occurrence_at,
    occurrences_in_range,
    occurs_on,
)

__all__ = [
    "NEVER",
    "UNBOUNDED",
    "EndCondition",
    "EndDate",
    "InvalidPattern",
    "MaxOccurrences",
    "OccurrenceRange",
    "RecurrencePattern",
    "Unbounded",
    "describe",
    "next_occurrence",
    "occurrence_at",
    "occurrences_in_range",
    "occurs_on",
]

"""Public domain model surface."""

from __future__ import annotations

from daybook.domain.model.entity import Versioned, VersionedEntity, new_id
from daybook.domain.model.enums import CategoryColor, EntityType, Frequency, RoutineKind
from daybook.domain.model.planning import Category, ChecklistEntry, Item
from daybook.domain.model.primitives import DayKey, RemoteRef
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
from daybook.domain.model.tracking import (
    Habit,
    HabitCompletion,
    RoutineProgress,
    RoutineStep,
    RoutineTemplate,
)

__all__ = [  # noqa: RUF022
    # base
    "Versioned",
    "VersionedEntity",
    "new_id",
    # planning
    "Category",
    "ChecklistEntry",
    "Item",
    # tracking
    "Habit",
    "HabitCompletion",
    "RoutineProgress",
    "RoutineStep",
    "RoutineTemplate",
    # recurrence
    "EndCondition",
    "EndDate",
    "InvalidPattern",
    "MaxOccurrences",
    "NEVER",
    "RecurrencePattern",
    "UNBOUNDED",
    "Unbounded",
    # enums
    "CategoryColor",
    "EntityType",
    "Frequency",
    "RoutineKind",
    # primitives
    "DayKey",
    "RemoteRef",
]

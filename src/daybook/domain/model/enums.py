"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Discriminator for versioned collections and their persisted records."""

    ITEM = "item"
    CATEGORY = "category"
    HABIT = "habit"
    HABIT_COMPLETION = "habit_completion"
    ROUTINE_TEMPLATE = "routine_template"
    ROUTINE_PROGRESS = "routine_progress"


class Frequency(StrEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def unit(self) -> str:
        """Singular calendar unit, e.g. ``"week"`` for ``WEEKLY``."""
        return _UNITS[self]

    @property
    def display_name(self) -> str:
        return "Never" if self is Frequency.NONE else self.value.capitalize()


_UNITS: dict[Frequency, str] = {
    Frequency.NONE: "none",
    Frequency.DAILY: "day",
    Frequency.WEEKLY: "week",
    Frequency.MONTHLY: "month",
    Frequency.YEARLY: "year",
}


class CategoryColor(StrEnum):
    ACCENT1 = "accent1"
    ACCENT2 = "accent2"
    ACCENT3 = "accent3"
    ACCENT4 = "accent4"
    ACCENT5 = "accent5"
    ACCENT6 = "accent6"
    ACCENT7 = "accent7"
    ACCENT8 = "accent8"
    ACCENT9 = "accent9"
    ACCENT10 = "accent10"


class RoutineKind(StrEnum):
    MORNING = "morning"
    EVENING = "evening"

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()} Routine"

"""Habits, daily completions and routines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import ClassVar
from uuid import UUID

from daybook.domain.dates import Clock, as_day, utcnow

from .entity import VersionedEntity, new_id
from .enums import EntityType, RoutineKind


@dataclass(eq=False, kw_only=True)
class Habit(VersionedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.HABIT

    name: str
    category_id: UUID | None = None
    is_active: bool = True


@dataclass(eq=False, kw_only=True)
class HabitCompletion(VersionedEntity):
    """Whether ``habit_id`` was done on ``day``. One record per habit and day."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.HABIT_COMPLETION

    habit_id: UUID
    day: date
    is_completed: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        self.day = as_day(self.day)


@dataclass(eq=False, kw_only=True)
class RoutineStep:
    id: UUID = field(default_factory=new_id)
    title: str
    estimated_minutes: int = 5
    is_completed: bool = False
    sort_order: int = 0


@dataclass(eq=False, kw_only=True)
class RoutineTemplate(VersionedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ROUTINE_TEMPLATE

    kind: RoutineKind
    steps: list[RoutineStep] = field(default_factory=list["RoutineStep"])
    is_enabled: bool = True


@dataclass(eq=False, kw_only=True)
class RoutineProgress(VersionedEntity):
    """A day's run through a routine, seeded from its template."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ROUTINE_PROGRESS

    day: date
    kind: RoutineKind
    steps: list[RoutineStep] = field(default_factory=list["RoutineStep"])
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        self.day = as_day(self.day)

    @classmethod
    def from_template(cls, template: RoutineTemplate, day: date) -> RoutineProgress:
        steps = [
            RoutineStep(
                title=step.title,
                estimated_minutes=step.estimated_minutes,
                sort_order=step.sort_order,
            )
            for step in template.steps
        ]
        return cls(day=day, kind=template.kind, steps=steps)

    @property
    def completed_count(self) -> int:
        return sum(1 for step in self.steps if step.is_completed)

    @property
    def total_count(self) -> int:
        return len(self.steps)

    @property
    def progress(self) -> float:
        if not self.steps:
            return 0.0
        return self.completed_count / self.total_count

    @property
    def is_completed(self) -> bool:
        return bool(self.steps) and self.completed_count == self.total_count

    @property
    def estimated_minutes(self) -> int:
        return sum(step.estimated_minutes for step in self.steps)

    @property
    def completed_minutes(self) -> int:
        return sum(step.estimated_minutes for step in self.steps if step.is_completed)

    def toggle_step(self, step_id: UUID, *, clock: Clock = utcnow) -> RoutineStep:
        """Flip one step; tracks when the run started and when it was finished."""

        step = next((candidate for candidate in self.steps if candidate.id == step_id), None)
        if step is None:
            raise KeyError(f"Routine step {step_id} not found")
        step.is_completed = not step.is_completed
        now = clock()
        self.touch(clock=clock)
        if self.started_at is None and step.is_completed:
            self.started_at = now
        if self.is_completed:
            if self.completed_at is None:
                self.completed_at = now
        else:
            self.completed_at = None
        return step

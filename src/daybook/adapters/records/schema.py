"""Pydantic models describing persisted entity records."""

from __future__ import annotations

from datetime import date, time
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from daybook.domain.model import CategoryColor, Frequency, RoutineKind


class RecordBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class VersionedRecord(RecordBaseModel):
    id: UUID
    last_modified: AwareDatetime
    sort_order: int = 0


class RecurrenceRecord(RecordBaseModel):
    frequency: Frequency = Frequency.NONE
    interval: int = 1
    end_date: date | None = None
    max_occurrences: int | None = None


class ChecklistEntryRecord(RecordBaseModel):
    id: UUID
    title: str
    is_completed: bool = False
    sort_order: int = 0


class ItemRecord(VersionedRecord):
    title: str
    notes: str = ""
    is_completed: bool = False
    assigned_date: date
    assigned_time: time | None = None
    category_id: UUID | None = None
    recurrence: RecurrenceRecord = Field(default_factory=RecurrenceRecord)
    checklist: list[ChecklistEntryRecord] = Field(default_factory=list)
    custom_order_days: list[str] = Field(default_factory=list)


class CategoryRecord(VersionedRecord):
    name: str
    color: CategoryColor = CategoryColor.ACCENT1


class HabitRecord(VersionedRecord):
    name: str
    category_id: UUID | None = None
    is_active: bool = True


class HabitCompletionRecord(VersionedRecord):
    habit_id: UUID
    day: date
    is_completed: bool = False


class RoutineStepRecord(RecordBaseModel):
    id: UUID
    title: str
    estimated_minutes: int = 5
    is_completed: bool = False
    sort_order: int = 0


class RoutineTemplateRecord(VersionedRecord):
    kind: RoutineKind
    steps: list[RoutineStepRecord] = Field(default_factory=list)
    is_enabled: bool = True


class RoutineProgressRecord(VersionedRecord):
    day: date
    kind: RoutineKind
    steps: list[RoutineStepRecord] = Field(default_factory=list)
    started_at: AwareDatetime | None = None
    completed_at: AwareDatetime | None = None

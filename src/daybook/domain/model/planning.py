"""Scheduled items, their checklists and categories."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID

from daybook.domain.dates import as_day, day_key

from .entity import VersionedEntity, new_id
from .enums import CategoryColor, EntityType
from .recurrence import NEVER, RecurrencePattern

if TYPE_CHECKING:
    from .primitives import DayKey


@dataclass(eq=False, kw_only=True)
class Category(VersionedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.CATEGORY

    name: str
    color: CategoryColor = CategoryColor.ACCENT1


@dataclass(eq=False, kw_only=True)
class ChecklistEntry:
    id: UUID = field(default_factory=new_id)
    title: str
    is_completed: bool = False
    sort_order: int = 0


@dataclass(eq=False, kw_only=True)
class Item(VersionedEntity):
    """A task or event assigned to a day, optionally recurring."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ITEM

    title: str
    notes: str = ""
    is_completed: bool = False
    assigned_date: date
    assigned_time: time | None = None
    category_id: UUID | None = None
    recurrence: RecurrencePattern = NEVER
    checklist: list[ChecklistEntry] = field(default_factory=list["ChecklistEntry"])
    custom_order_days: set[DayKey] = field(default_factory=set["DayKey"])

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.assigned_date, datetime):
            self.assigned_date = as_day(self.assigned_date)

    def has_custom_order(self, day: date) -> bool:
        return day_key(day) in self.custom_order_days

    def set_custom_order(self, day: date, *, enabled: bool) -> None:
        key = day_key(day)
        if enabled:
            self.custom_order_days.add(key)
        else:
            self.custom_order_days.discard(key)

    def add_checklist_entry(self, title: str) -> ChecklistEntry:
        entry = ChecklistEntry(title=title, sort_order=len(self.checklist))
        self.checklist.append(entry)
        return entry

    def remove_checklist_entry(self, entry_id: UUID) -> None:
        self.checklist = [entry for entry in self.checklist if entry.id != entry_id]
        for index, entry in enumerate(self.checklist):
            entry.sort_order = index

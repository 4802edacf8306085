"""Translate domain entities to and from persisted records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError

from daybook.domain.model import (
    Category,
    ChecklistEntry,
    EntityType,
    Habit,
    HabitCompletion,
    InvalidPattern,
    Item,
    RecurrencePattern,
    RoutineProgress,
    RoutineStep,
    RoutineTemplate,
    VersionedEntity,
)
from daybook.domain.ports import Codec, RecordDecodeError

from .schema import (
    CategoryRecord,
    ChecklistEntryRecord,
    HabitCompletionRecord,
    HabitRecord,
    ItemRecord,
    RecurrenceRecord,
    RoutineProgressRecord,
    RoutineStepRecord,
    RoutineTemplateRecord,
    VersionedRecord,
)

if TYPE_CHECKING:
    from uuid import UUID

    from daybook.domain.model import RemoteRef
    from daybook.domain.ports import Record


def _versioned_fields(entity: VersionedEntity) -> dict[str, Any]:
    return {
        "id": entity.id,
        "last_modified": entity.last_modified,
        "sort_order": entity.sort_order,
    }


def _versioned_kwargs(record: VersionedRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "last_modified": record.last_modified,
        "sort_order": record.sort_order,
    }


def _steps_to_records(steps: list[RoutineStep]) -> list[RoutineStepRecord]:
    return [
        RoutineStepRecord(
            id=step.id,
            title=step.title,
            estimated_minutes=step.estimated_minutes,
            is_completed=step.is_completed,
            sort_order=step.sort_order,
        )
        for step in steps
    ]


def _steps_from_records(records: list[RoutineStepRecord]) -> list[RoutineStep]:
    return [
        RoutineStep(
            id=record.id,
            title=record.title,
            estimated_minutes=record.estimated_minutes,
            is_completed=record.is_completed,
            sort_order=record.sort_order,
        )
        for record in records
    ]


class RecordCodec[TEntity: VersionedEntity, TRecord: VersionedRecord](ABC):
    """Validate records with a pydantic schema and map them onto entities."""

    entity_type: ClassVar[EntityType]
    schema: ClassVar[type[VersionedRecord]]

    def to_record(self, entity: TEntity) -> Record:
        return self._to_schema(entity).model_dump(mode="json")

    def from_record(self, record: Record) -> TEntity:
        try:
            validated: TRecord = self.schema.model_validate(record)  # type: ignore[assignment]
            return self._to_entity(validated)
        except (ValidationError, InvalidPattern) as exc:
            raise RecordDecodeError(f"Invalid {self.entity_type} record: {exc}") from exc

    @abstractmethod
    def _to_schema(self, entity: TEntity) -> TRecord: ...

    @abstractmethod
    def _to_entity(self, record: TRecord) -> TEntity: ...


class CategoryCodec(RecordCodec[Category, CategoryRecord]):
    entity_type = EntityType.CATEGORY
    schema = CategoryRecord

    def _to_schema(self, entity: Category) -> CategoryRecord:
        return CategoryRecord(**_versioned_fields(entity), name=entity.name, color=entity.color)

    def _to_entity(self, record: CategoryRecord) -> Category:
        return Category(**_versioned_kwargs(record), name=record.name, color=record.color)


class ItemCodec(RecordCodec[Item, ItemRecord]):
    entity_type = EntityType.ITEM
    schema = ItemRecord

    def _to_schema(self, entity: Item) -> ItemRecord:
        pattern = entity.recurrence
        return ItemRecord(
            **_versioned_fields(entity),
            title=entity.title,
            notes=entity.notes,
            is_completed=entity.is_completed,
            assigned_date=entity.assigned_date,
            assigned_time=entity.assigned_time,
            category_id=entity.category_id,
            recurrence=RecurrenceRecord(
                frequency=pattern.frequency,
                interval=pattern.interval,
                end_date=pattern.end_date,
                max_occurrences=pattern.max_occurrences,
            ),
            checklist=[
                ChecklistEntryRecord(
                    id=entry.id,
                    title=entry.title,
                    is_completed=entry.is_completed,
                    sort_order=entry.sort_order,
                )
                for entry in entity.checklist
            ],
            custom_order_days=sorted(entity.custom_order_days),
        )

    def _to_entity(self, record: ItemRecord) -> Item:
        recurrence = record.recurrence
        return Item(
            **_versioned_kwargs(record),
            title=record.title,
            notes=record.notes,
            is_completed=record.is_completed,
            assigned_date=record.assigned_date,
            assigned_time=record.assigned_time,
            category_id=record.category_id,
            recurrence=RecurrencePattern.from_fields(
                recurrence.frequency,
                recurrence.interval,
                end_date=recurrence.end_date,
                max_occurrences=recurrence.max_occurrences,
            ),
            checklist=[
                ChecklistEntry(
                    id=entry.id,
                    title=entry.title,
                    is_completed=entry.is_completed,
                    sort_order=entry.sort_order,
                )
                for entry in record.checklist
            ],
            custom_order_days=set(record.custom_order_days),
        )


class HabitCodec(RecordCodec[Habit, HabitRecord]):
    entity_type = EntityType.HABIT
    schema = HabitRecord

    def _to_schema(self, entity: Habit) -> HabitRecord:
        return HabitRecord(
            **_versioned_fields(entity),
            name=entity.name,
            category_id=entity.category_id,
            is_active=entity.is_active,
        )

    def _to_entity(self, record: HabitRecord) -> Habit:
        return Habit(
            **_versioned_kwargs(record),
            name=record.name,
            category_id=record.category_id,
            is_active=record.is_active,
        )


class HabitCompletionCodec(RecordCodec[HabitCompletion, HabitCompletionRecord]):
    entity_type = EntityType.HABIT_COMPLETION
    schema = HabitCompletionRecord

    def _to_schema(self, entity: HabitCompletion) -> HabitCompletionRecord:
        return HabitCompletionRecord(
            **_versioned_fields(entity),
            habit_id=entity.habit_id,
            day=entity.day,
            is_completed=entity.is_completed,
        )

    def _to_entity(self, record: HabitCompletionRecord) -> HabitCompletion:
        return HabitCompletion(
            **_versioned_kwargs(record),
            habit_id=record.habit_id,
            day=record.day,
            is_completed=record.is_completed,
        )


class RoutineTemplateCodec(RecordCodec[RoutineTemplate, RoutineTemplateRecord]):
    entity_type = EntityType.ROUTINE_TEMPLATE
    schema = RoutineTemplateRecord

    def _to_schema(self, entity: RoutineTemplate) -> RoutineTemplateRecord:
        return RoutineTemplateRecord(
            **_versioned_fields(entity),
            kind=entity.kind,
            steps=_steps_to_records(entity.steps),
            is_enabled=entity.is_enabled,
        )

    def _to_entity(self, record: RoutineTemplateRecord) -> RoutineTemplate:
        return RoutineTemplate(
            **_versioned_kwargs(record),
            kind=record.kind,
            steps=_steps_from_records(record.steps),
            is_enabled=record.is_enabled,
        )


class RoutineProgressCodec(RecordCodec[RoutineProgress, RoutineProgressRecord]):
    entity_type = EntityType.ROUTINE_PROGRESS
    schema = RoutineProgressRecord

    def _to_schema(self, entity: RoutineProgress) -> RoutineProgressRecord:
        return RoutineProgressRecord(
            **_versioned_fields(entity),
            day=entity.day,
            kind=entity.kind,
            steps=_steps_to_records(entity.steps),
            started_at=entity.started_at,
            completed_at=entity.completed_at,
        )

    def _to_entity(self, record: RoutineProgressRecord) -> RoutineProgress:
        return RoutineProgress(
            **_versioned_kwargs(record),
            day=record.day,
            kind=record.kind,
            steps=_steps_from_records(record.steps),
            started_at=record.started_at,
            completed_at=record.completed_at,
        )


CODECS: dict[EntityType, RecordCodec[Any, Any]] = {
    codec.entity_type: codec
    for codec in (
        ItemCodec(),
        CategoryCodec(),
        HabitCodec(),
        HabitCompletionCodec(),
        RoutineTemplateCodec(),
        RoutineProgressCodec(),
    )
}


def codec_for(entity_type: EntityType | str) -> RecordCodec[Any, Any]:
    """Return the codec registered for ``entity_type``."""

    try:
        return CODECS[EntityType(entity_type)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"No codec registered for entity type {entity_type!r}") from exc


def record_name(entity_type: EntityType | str, entity_id: UUID) -> RemoteRef:
    """Name under which a store keeps the record of one entity."""

    return f"{EntityType(entity_type)}/{entity_id}"


if TYPE_CHECKING:
    _codec_check: Codec[Item] = ItemCodec()

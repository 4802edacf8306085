from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from daybook.domain.model import (
    Category,
    EntityType,
    HabitCompletion,
    Item,
    Versioned,
    VersionedEntity,
)
from tests.helpers.clock import FakeClock


def test_entities_get_identity_on_creation() -> None:
    first = Category(name="Work")
    second = Category(name="Work")

    assert first.id != second.id
    assert first.remote_ref is None
    assert not first.is_persisted
    assert first.last_modified.tzinfo is not None


def test_entity_type_discriminator() -> None:
    assert Category(name="Home").entity_type is EntityType.CATEGORY
    assert Item(title="Pay rent", assigned_date=date(2024, 1, 1)).entity_type is EntityType.ITEM


def test_entities_satisfy_versioned_protocol() -> None:
    category = Category(name="Home")

    assert isinstance(category, Versioned)
    assert isinstance(category, VersionedEntity)


def test_touch_advances_last_modified(clock: FakeClock) -> None:
    category = Category(name="Home", last_modified=datetime(2024, 1, 1, tzinfo=UTC))

    result = category.touch(clock=clock)

    assert result == clock.now
    assert category.last_modified == clock.now


def test_touch_never_moves_backward() -> None:
    future = datetime(2030, 1, 1, tzinfo=UTC)
    category = Category(name="Home", last_modified=future)

    category.touch(clock=FakeClock(datetime(2024, 1, 1, tzinfo=UTC)))

    assert category.last_modified == future


def test_identity_equality_is_by_object() -> None:
    category = Category(name="Home")
    copy = Category(id=category.id, name="Home", last_modified=category.last_modified)

    assert category != copy
    assert category.id == copy.id


def test_item_truncates_assigned_datetime() -> None:
    item = Item(title="Dentist", assigned_date=datetime(2024, 2, 3, 9, 30, tzinfo=UTC))

    assert item.assigned_date == date(2024, 2, 3)
    assert type(item.assigned_date) is date


def test_item_custom_order_flags_per_day() -> None:
    item = Item(title="Dentist", assigned_date=date(2024, 2, 3))

    item.set_custom_order(date(2024, 2, 3), enabled=True)

    assert item.has_custom_order(date(2024, 2, 3))
    assert not item.has_custom_order(date(2024, 2, 4))
    assert item.custom_order_days == {"2024-02-03"}

    item.set_custom_order(date(2024, 2, 3), enabled=False)
    assert not item.has_custom_order(date(2024, 2, 3))


def test_item_checklist_keeps_positions_contiguous() -> None:
    item = Item(title="Pack", assigned_date=date(2024, 2, 3))
    first = item.add_checklist_entry("Passport")
    second = item.add_checklist_entry("Charger")
    third = item.add_checklist_entry("Snacks")

    item.remove_checklist_entry(second.id)

    assert [entry.title for entry in item.checklist] == ["Passport", "Snacks"]
    assert [entry.sort_order for entry in item.checklist] == [0, 1]
    assert first.sort_order == 0
    assert third.sort_order == 1


def test_habit_completion_stores_calendar_day() -> None:
    completion = HabitCompletion(
        habit_id=Category(name="x").id,
        day=datetime(2024, 3, 1, 22, tzinfo=UTC),
    )

    assert completion.day == date(2024, 3, 1)


def test_naive_last_modified_is_rejected() -> None:
    with pytest.raises(ValueError, match="timezone information"):
        Category(name="Home", last_modified=datetime(2024, 1, 1))


def test_last_modified_is_normalized_to_utc() -> None:
    offset = timezone(timedelta(hours=2))
    item = Item(
        title="Dentist",
        assigned_date=date(2024, 2, 3),
        last_modified=datetime(2024, 2, 3, 10, tzinfo=offset),
    )

    assert item.last_modified == datetime(2024, 2, 3, 8, tzinfo=UTC)
    assert item.last_modified.tzinfo is UTC

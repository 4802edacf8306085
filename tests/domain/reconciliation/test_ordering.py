from __future__ import annotations

import pytest

from daybook.domain.reconciliation import append_position, move, renumber
from tests.helpers.clock import FakeClock
from tests.helpers.entities import at, entity_id, make_category


def test_append_position_is_collection_size() -> None:
    assert append_position([]) == 0
    assert append_position([make_category("a"), make_category("b")]) == 2


def test_renumber_assigns_contiguous_positions(clock: FakeClock) -> None:
    entities = [
        make_category("a", sort_order=3),
        make_category("b", sort_order=1),
        make_category("c", sort_order=2),
    ]

    renumbered = renumber(entities, clock=clock)

    assert [entity.sort_order for entity in renumbered] == [0, 1, 2]
    assert [entity.id for entity in renumbered] == [entity.id for entity in entities]


def test_renumber_touches_only_moved_records(clock: FakeClock) -> None:
    entities = [make_category("a", sort_order=0), make_category("b", sort_order=5)]

    renumber(entities, clock=clock)

    assert entities[0].last_modified == at(0)
    assert entities[1].last_modified == clock.now


def test_move_reorders_and_renumbers(clock: FakeClock) -> None:
    entities = [make_category(name, sort_order=index) for index, name in enumerate("abcd")]

    moved = move(entities, 3, 1, clock=clock)

    assert [entity.id for entity in moved] == [
        entity_id("a"),
        entity_id("d"),
        entity_id("b"),
        entity_id("c"),
    ]
    assert [entity.sort_order for entity in moved] == [0, 1, 2, 3]
    assert moved[0].last_modified == at(0)
    assert all(entity.last_modified == clock.now for entity in moved[1:])


def test_move_follows_sort_order_not_input_order(clock: FakeClock) -> None:
    entities = [make_category("b", sort_order=1), make_category("a", sort_order=0)]

    moved = move(entities, 0, 1, clock=clock)

    assert [entity.id for entity in moved] == [entity_id("b"), entity_id("a")]


@pytest.mark.parametrize(("source", "destination"), [(-1, 0), (2, 0), (0, 2)])
def test_move_rejects_out_of_range_indices(
    clock: FakeClock, source: int, destination: int
) -> None:
    entities = [make_category("a"), make_category("b", sort_order=1)]

    with pytest.raises(IndexError):
        move(entities, source, destination, clock=clock)

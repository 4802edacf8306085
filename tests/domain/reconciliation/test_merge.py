from __future__ import annotations

from daybook.domain.reconciliation import merge, reconcile
from tests.helpers.entities import entity_id, make_category


def _ids(entities: list) -> list:
    return [entity.id for entity in entities]


def test_merge_prefers_newer_remote_copy() -> None:
    local = [make_category("a", modified=10)]
    remote = [make_category("a", modified=20)]
    remote[0].name = "renamed"

    merged = merge(local, remote)

    assert len(merged) == 1
    assert merged[0] is remote[0]
    assert merged[0].name == "renamed"


def test_merge_prefers_newer_local_copy() -> None:
    local = [make_category("a", modified=30)]
    remote = [make_category("a", modified=20)]

    merged = merge(local, remote)

    assert merged == local


def test_merge_keeps_local_copy_on_equal_timestamps() -> None:
    local = [make_category("a", modified=10)]
    remote = [make_category("a", modified=10)]

    merged = merge(local, remote)

    assert merged[0] is local[0]


def test_merge_unions_disjoint_collections_in_sort_order() -> None:
    local = [make_category("a", sort_order=0), make_category("c", sort_order=2)]
    remote = [make_category("b", sort_order=1)]

    merged = merge(local, remote)

    assert _ids(merged) == [entity_id("a"), entity_id("b"), entity_id("c")]


def test_merge_with_empty_sides() -> None:
    only = [make_category("a"), make_category("b", sort_order=1)]

    assert _ids(merge([], only)) == _ids(only)
    assert _ids(merge(only, [])) == _ids(only)
    assert merge([], []) == []


def test_merge_never_loses_or_duplicates_ids() -> None:
    local = [
        make_category("a", modified=5, sort_order=0),
        make_category("b", modified=5, sort_order=1),
        make_category("c", modified=5, sort_order=2),
    ]
    remote = [
        make_category("b", modified=9, sort_order=1),
        make_category("d", modified=1, sort_order=3),
    ]

    merged = merge(local, remote)

    assert sorted(_ids(merged)) == sorted({entity.id for entity in local + remote})
    assert len(merged) == 4


def test_merge_is_idempotent() -> None:
    local = [make_category("a", modified=5, sort_order=1), make_category("b", sort_order=0)]
    remote = [make_category("a", modified=7, sort_order=1), make_category("c", sort_order=2)]

    once = merge(local, remote)
    twice = merge(once, remote)

    assert _ids(twice) == _ids(once)
    assert [entity.last_modified for entity in twice] == [
        entity.last_modified for entity in once
    ]


def test_merge_keeps_duplicate_positions_stable_and_unrenumbered() -> None:
    local = [make_category("a", sort_order=0), make_category("b", sort_order=1)]
    remote = [make_category("c", sort_order=1)]

    merged = merge(local, remote)

    assert [entity.sort_order for entity in merged] == [0, 1, 1]
    assert set(_ids(merged[1:])) == {entity_id("b"), entity_id("c")}


def test_merge_does_not_mutate_inputs() -> None:
    local = [make_category("b", sort_order=1), make_category("a", sort_order=0)]
    remote = [make_category("a", modified=9, sort_order=0)]
    local_before = list(local)
    remote_before = list(remote)

    merge(local, remote)

    assert local == local_before
    assert remote == remote_before
    assert local[0].sort_order == 1


def test_reconcile_reports_adopted_retained_and_outgoing() -> None:
    local = [
        make_category("shared-old", modified=1, sort_order=0),
        make_category("shared-new", modified=9, sort_order=1),
        make_category("shared-same", modified=5, sort_order=2),
        make_category("local-only", modified=1, sort_order=3),
    ]
    remote = [
        make_category("shared-old", modified=4, sort_order=0),
        make_category("shared-new", modified=2, sort_order=1),
        make_category("shared-same", modified=5, sort_order=2),
        make_category("remote-only", modified=1, sort_order=4),
    ]

    result = reconcile(local, remote)

    assert _ids(result.adopted) == [entity_id("shared-old"), entity_id("remote-only")]
    assert _ids(result.retained) == [entity_id("shared-new"), entity_id("shared-same")]
    assert _ids(result.outgoing) == [entity_id("shared-new"), entity_id("local-only")]
    assert result.changed_locally
    assert len(result.merged) == 5


def test_reconcile_without_remote_changes_adopts_nothing() -> None:
    local = [make_category("a", modified=3)]
    remote = [make_category("a", modified=3)]

    result = reconcile(local, remote)

    assert not result.changed_locally
    assert result.outgoing == []

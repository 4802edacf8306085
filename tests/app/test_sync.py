from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002

from daybook.adapters.memory import InMemoryStore
from daybook.adapters.records import CategoryCodec, HabitCodec, HabitCompletionCodec
from daybook.adapters.sqlalchemy import SqlAlchemyStore, open_engine
from daybook.app import remove_habit, sync_collection, sync_entity_type
from daybook.domain.managers import EntityManager, SyncAction
from daybook.domain.model import Category, Habit, HabitCompletion
from tests.helpers.clock import FakeClock
from tests.helpers.entities import at, entity_id, make_category


@pytest.fixture
def local() -> InMemoryStore[Category]:
    return InMemoryStore(CategoryCodec())


@pytest.fixture
def remote() -> InMemoryStore[Category]:
    return InMemoryStore(CategoryCodec())


def test_sync_collection_merges_both_sides(
    local: InMemoryStore[Category], remote: InMemoryStore[Category]
) -> None:
    local.save(make_category("work", modified=10, sort_order=0))
    local.save(make_category("home", modified=1, sort_order=1))
    newer_home = make_category("home", modified=20, sort_order=1)
    newer_home.name = "house"
    remote.save(newer_home)

    report = sync_collection(local=local, remote=remote)

    assert report.ok
    assert report.adopted == 1
    assert report.pushed == 1
    local_names = {entity.id: entity.name for entity in local.fetch_all()}
    remote_names = {entity.id: entity.name for entity in remote.fetch_all()}
    assert local_names == remote_names
    assert local_names[entity_id("home")] == "house"
    assert entity_id("work") in remote_names


def test_sync_collection_without_push_only_updates_local(
    local: InMemoryStore[Category], remote: InMemoryStore[Category]
) -> None:
    local.save(make_category("work"))
    remote.save(make_category("home", sort_order=1))

    report = sync_collection(local=local, remote=remote, push=False)

    assert report.pushed == 0
    assert len(local) == 2
    assert len(remote) == 1


def test_sync_collection_leaves_local_alone_when_remote_is_down(
    local: InMemoryStore[Category], remote: InMemoryStore[Category]
) -> None:
    local.save(make_category("work", modified=3))
    remote.online = False

    report = sync_collection(local=local, remote=remote)

    assert not report.ok
    assert [entity.last_modified for entity in local.fetch_all()] == [at(3)]


def test_sync_entity_type_between_databases(
    started_engine: Engine,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.delenv("DAYBOOK_PUSH_AFTER_MERGE", raising=False)
    remote_uri = f"sqlite+pysqlite:///{tmp_path / 'remote.db'}"
    remote_engine = open_engine(remote_uri)
    try:
        SqlAlchemyStore(CategoryCodec(), engine=remote_engine).save(make_category("home"))
    finally:
        remote_engine.dispose()
    SqlAlchemyStore(CategoryCodec()).save(make_category("work", sort_order=1))

    with caplog.at_level("INFO"):
        report = sync_entity_type("category", remote_uri=remote_uri)

    assert report.ok
    finished = [r for r in caplog.records if str(r.msg).startswith("Finished sync of")]
    assert [r.getMessage() for r in finished] == [
        "Finished sync of category: fetched=1, adopted=1, pushed=1, errors=0"
    ]
    assert report.fetched == 1
    assert report.pushed == 1
    local_ids = {entity.id for entity in SqlAlchemyStore(CategoryCodec()).fetch_all()}
    assert local_ids == {entity_id("home"), entity_id("work")}
    remote_engine = open_engine(remote_uri)
    try:
        remote_ids = {
            entity.id
            for entity in SqlAlchemyStore(CategoryCodec(), engine=remote_engine).fetch_all()
        }
    finally:
        remote_engine.dispose()
    assert remote_ids == local_ids


def test_remove_habit_cascades_to_completions(clock: FakeClock) -> None:
    habits = EntityManager(InMemoryStore(HabitCodec()), clock=clock)
    completions = EntityManager(InMemoryStore(HabitCompletionCodec()), clock=clock)
    habit = habits.add(Habit(id=entity_id("habit"), name="Read", last_modified=at(0)))
    other = habits.add(Habit(id=entity_id("other"), name="Run", last_modified=at(0)))
    done = completions.add(HabitCompletion(habit_id=habit.id, day=at(0), is_completed=True))
    completions.add(HabitCompletion(habit_id=other.id, day=at(0), is_completed=True))
    habits.flush()
    completions.flush()

    removed = remove_habit(habits, completions, habit.id)

    assert removed is habit
    assert [entry.id for entry in habits.entities] == [other.id]
    assert [entry.habit_id for entry in completions.entities] == [other.id]
    deletes = [op for op in completions.pending if op.action is SyncAction.DELETE]
    assert [op.entity_id for op in deletes] == [done.id]

    report = completions.flush()

    assert report.deleted == 1
    assert len(completions.store.fetch_all()) == 1

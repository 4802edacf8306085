"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from daybook.adapters.records import codec_for
from daybook.adapters.sqlalchemy import SqlAlchemyStore, is_started, open_engine, startup
from daybook.config import get_remote_config, get_sync_config
from daybook.domain.habits import completions_of
from daybook.domain.managers import EntityManager, SyncReport

if TYPE_CHECKING:
    from uuid import UUID

    from daybook.domain.model import EntityType, Habit, HabitCompletion, VersionedEntity
    from daybook.domain.ports import Store


log = getLogger(__name__)


def sync_collection[T: VersionedEntity](
    *,
    local: Store[T],
    remote: Store[T],
    push: bool = True,
) -> SyncReport:
    """Merge the ``local`` copy of a collection with ``remote`` and store the result locally.

    The local store is read once, the merge runs through an ``EntityManager``
    bound to ``remote``, and the merged snapshot is written back to ``local``
    unless the remote fetch failed.
    """

    manager = EntityManager(remote, local.fetch_all())
    report = manager.sync(push=push)
    if manager.last_synced_at is not None:
        for entity in manager.entities:
            local.save(entity)
    return report


def sync_entity_type(
    entity_type: EntityType | str,
    *,
    remote_uri: str | None = None,
    push: bool | None = None,
) -> SyncReport:
    """Synchronise one collection of the local database with the configured remote."""

    if not is_started():
        startup()
    codec = codec_for(entity_type)
    effective_push = get_sync_config().push_after_merge if push is None else push
    effective_remote_uri = remote_uri or get_remote_config().uri
    log.info(
        "Starting sync: entity_type=%s, push=%s",
        codec.entity_type,
        effective_push,
    )

    remote_engine = open_engine(effective_remote_uri)
    try:
        report = sync_collection(
            local=SqlAlchemyStore(codec),
            remote=SqlAlchemyStore(codec, engine=remote_engine),
            push=effective_push,
        )
    finally:
        remote_engine.dispose()

    log.info(
        "Finished sync of %s: fetched=%s, adopted=%s, pushed=%s, errors=%s",
        codec.entity_type,
        report.fetched,
        report.adopted,
        report.pushed,
        len(report.errors),
    )
    return report


def remove_habit(
    habits: EntityManager[Habit],
    completions: EntityManager[HabitCompletion],
    habit_id: UUID,
) -> Habit:
    """Delete a habit together with all of its completion records."""

    habit = habits.remove(habit_id)
    for completion in completions_of(completions.entities, habit_id):
        completions.remove(completion.id)
    return habit

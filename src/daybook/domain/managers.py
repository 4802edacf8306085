"""Entity managers: one local-first collection bound to one store.

Every mutation is applied locally first and then enqueued as a store operation
("mutate-then-enqueue-sync"). Nothing reaches the store until ``flush`` or
``sync`` runs, and store failures are reported rather than retried.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from daybook.domain.dates import utcnow
from daybook.domain.ports import StoreError
from daybook.domain.reconciliation import append_position, reconcile, renumber
from daybook.domain.reconciliation import move as move_position

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import datetime
    from uuid import UUID

    from daybook.domain.dates import Clock
    from daybook.domain.model import RemoteRef, VersionedEntity
    from daybook.domain.ports import Store


log = getLogger(__name__)

_PROTECTED_FIELDS = frozenset({"id", "last_modified", "sort_order", "remote_ref"})


class UnknownEntityError(KeyError):
    """Raised when a manager is asked for an id it does not hold."""


class SyncAction(StrEnum):
    SAVE = "save"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class SyncOperation:
    action: SyncAction
    entity_id: UUID
    ref: RemoteRef | None = None


@dataclass(slots=True)
class SyncReport:
    """Outcome of a flush or sync run."""

    fetched: int = 0
    adopted: int = 0
    pushed: int = 0
    deleted: int = 0
    errors: list[StoreError] = field(default_factory=list["StoreError"])

    @property
    def ok(self) -> bool:
        return not self.errors

    def absorb(self, other: SyncReport) -> None:
        self.pushed += other.pushed
        self.deleted += other.deleted
        self.errors.extend(other.errors)


class EntityManager[T: VersionedEntity]:
    """Own one collection in display order and keep it in step with ``store``."""

    def __init__(
        self,
        store: Store[T],
        entities: Iterable[T] = (),
        *,
        clock: Clock = utcnow,
    ) -> None:
        self.store = store
        self.clock = clock
        self._entities: list[T] = sorted(entities, key=lambda entity: entity.sort_order)
        self._pending: list[SyncOperation] = []
        self.last_error: StoreError | None = None
        self.last_synced_at: datetime | None = None

    # Queries -------------------------------------------------------------------

    @property
    def entities(self) -> tuple[T, ...]:
        return tuple(self._entities)

    @property
    def pending(self) -> tuple[SyncOperation, ...]:
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._entities)

    def find(self, entity_id: UUID) -> T | None:
        return next((entity for entity in self._entities if entity.id == entity_id), None)

    def get(self, entity_id: UUID) -> T:
        entity = self.find(entity_id)
        if entity is None:
            raise UnknownEntityError(entity_id)
        return entity

    # Local mutations -----------------------------------------------------------

    def add(self, entity: T) -> T:
        """Append ``entity`` at the end of the collection."""

        if self.find(entity.id) is not None:
            raise ValueError(f"Entity {entity.id} is already managed")
        entity.sort_order = append_position(self._entities)
        entity.touch(clock=self.clock)
        self._entities.append(entity)
        self._enqueue_save(entity)
        return entity

    def update(self, entity_id: UUID, **changes: object) -> T:
        """Set attributes on one entity; bookkeeping fields cannot be changed here."""

        protected = _PROTECTED_FIELDS.intersection(changes)
        if protected:
            raise ValueError(f"Cannot update bookkeeping fields: {', '.join(sorted(protected))}")
        entity = self.get(entity_id)
        for name, value in changes.items():
            if not hasattr(entity, name):
                raise AttributeError(f"{type(entity).__name__} has no attribute {name!r}")
            setattr(entity, name, value)
        entity.touch(clock=self.clock)
        self._enqueue_save(entity)
        return entity

    def modify[R](self, entity_id: UUID, mutate: Callable[[T], R]) -> R:
        """Run ``mutate`` against one entity and record it as a local change."""

        entity = self.get(entity_id)
        result = mutate(entity)
        entity.touch(clock=self.clock)
        self._enqueue_save(entity)
        return result

    def remove(self, entity_id: UUID) -> T:
        """Drop one entity locally and schedule its remote delete if it was ever saved."""

        entity = self.get(entity_id)
        remaining = [candidate for candidate in self._entities if candidate.id != entity_id]
        self._pending = [op for op in self._pending if op.entity_id != entity_id]
        self._commit_order(remaining)
        if entity.remote_ref is not None:
            self._pending.append(
                SyncOperation(SyncAction.DELETE, entity_id=entity.id, ref=entity.remote_ref)
            )
        return entity

    def move(self, source: int, destination: int) -> list[T]:
        """Move the entity at ``source`` to ``destination`` and renumber."""

        previous = {entity.id: entity.sort_order for entity in self._entities}
        self._entities = move_position(self._entities, source, destination, clock=self.clock)
        self._enqueue_repositioned(previous)
        return list(self._entities)

    def reorder(self, ordered: Sequence[T]) -> list[T]:
        """Adopt ``ordered`` (same ids, new order) as the display order."""

        same_ids = {entity.id for entity in ordered} == {entity.id for entity in self._entities}
        if not same_ids or len(ordered) != len(self._entities):
            raise ValueError("Reorder must contain exactly the managed entities")
        self._commit_order(list(ordered))
        return list(self._entities)

    # Store interaction ---------------------------------------------------------

    def flush(self) -> SyncReport:
        """Send every queued operation to the store.

        Failed operations are reported and dropped from the queue.
        """

        report = SyncReport()
        operations, self._pending = self._pending, []
        for operation in operations:
            self._run(operation, report)
        return report

    def sync(self, *, push: bool = True) -> SyncReport:
        """Fetch the remote snapshot, merge it and optionally push local changes.

        Queued deletes go out before the fetch so they are not merged back in.
        Queued saves for records the remote side won are discarded.
        """

        report = SyncReport()
        deleted_ids = {op.entity_id for op in self._pending if op.action is SyncAction.DELETE}
        if push:
            deletes = [op for op in self._pending if op.action is SyncAction.DELETE]
            self._pending = [op for op in self._pending if op.action is not SyncAction.DELETE]
            for operation in deletes:
                self._run(operation, report)

        try:
            remote = self.store.fetch_all()
        except StoreError as exc:
            log.warning("Fetch failed, keeping local state: %s", exc)
            self._record_error(exc, report)
            return report

        # records deleted locally stay deleted even while their remote delete is pending or failed
        result = reconcile(
            self._entities,
            [entity for entity in remote if entity.id not in deleted_ids],
        )
        self._entities = result.merged
        report.fetched = len(remote)
        report.adopted = len(result.adopted)

        adopted_ids = {entity.id for entity in result.adopted}
        self._pending = [
            op
            for op in self._pending
            if not (op.action is SyncAction.SAVE and op.entity_id in adopted_ids)
        ]
        if push:
            for entity in result.outgoing:
                self._enqueue_save(entity)
            report.absorb(self.flush())

        self.last_synced_at = self.clock()
        log.info(
            "Synced %s: fetched=%s, adopted=%s, pushed=%s, deleted=%s, errors=%s",
            type(self.store).__name__,
            report.fetched,
            report.adopted,
            report.pushed,
            report.deleted,
            len(report.errors),
        )
        return report

    # Internals -----------------------------------------------------------------

    def _commit_order(self, ordered: list[T]) -> None:
        previous = {entity.id: entity.sort_order for entity in ordered}
        self._entities = renumber(ordered, clock=self.clock)
        self._enqueue_repositioned(previous)

    def _enqueue_repositioned(self, previous: dict[UUID, int]) -> None:
        for entity in self._entities:
            if previous.get(entity.id) != entity.sort_order:
                self._enqueue_save(entity)

    def _enqueue_save(self, entity: T) -> None:
        operation = SyncOperation(SyncAction.SAVE, entity_id=entity.id)
        if operation not in self._pending:
            self._pending.append(operation)

    def _run(self, operation: SyncOperation, report: SyncReport) -> None:
        try:
            if operation.action is SyncAction.DELETE:
                if operation.ref is None:
                    return
                self.store.delete(operation.ref)
                report.deleted += 1
                return
            entity = self.find(operation.entity_id)
            if entity is None:
                return
            saved = self.store.save(entity)
            entity.remote_ref = saved.remote_ref
            report.pushed += 1
        except StoreError as exc:
            log.warning("Store %s failed for %s: %s", operation.action, operation.entity_id, exc)
            self._record_error(exc, report)

    def _record_error(self, exc: StoreError, report: SyncReport) -> None:
        self.last_error = exc
        report.errors.append(exc)


__all__ = [
    "EntityManager",
    "SyncAction",
    "SyncOperation",
    "SyncReport",
    "UnknownEntityError",
]

"""Last-write-wins merge of a local and a remote snapshot of one collection.

Rules:
- every id present on either side appears exactly once in the result
- for a shared id the strictly newer ``last_modified`` wins; ties keep the local copy
- records present on one side only are carried over untouched
- the result is stably sorted by ``sort_order``; positions are never renumbered here

Duplicate ids inside a single input are a caller bug and are not detected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from daybook.domain.model import Versioned

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID


@dataclass(slots=True)
class MergeResult[T: Versioned]:
    """Merged collection plus what each side contributed."""

    merged: list[T] = field(default_factory=list["T"])
    adopted: list[T] = field(default_factory=list["T"])
    retained: list[T] = field(default_factory=list["T"])
    outgoing: list[T] = field(default_factory=list["T"])

    @property
    def changed_locally(self) -> bool:
        """Whether the merge replaced or added anything on the local side."""
        return bool(self.adopted)


def _sort_key(entity: Versioned) -> int:
    return entity.sort_order


def reconcile[T: Versioned](local: Iterable[T], remote: Iterable[T]) -> MergeResult[T]:
    """Merge ``remote`` into ``local`` and report adopted/retained/outgoing records.

    ``adopted`` holds remote records that replaced or extended the local side,
    ``retained`` the local records that survived a shared id, and ``outgoing`` the
    local records that are unknown upstream or newer than their remote copy.
    """

    result: MergeResult[T] = MergeResult()
    pending: dict[UUID, T] = {entity.id: entity for entity in local}
    combined: list[T] = []

    for remote_entity in remote:
        local_entity = pending.pop(remote_entity.id, None)
        if local_entity is None:
            combined.append(remote_entity)
            result.adopted.append(remote_entity)
        elif remote_entity.last_modified > local_entity.last_modified:
            combined.append(remote_entity)
            result.adopted.append(remote_entity)
        else:
            combined.append(local_entity)
            result.retained.append(local_entity)
            if local_entity.last_modified > remote_entity.last_modified:
                result.outgoing.append(local_entity)

    for local_entity in pending.values():
        combined.append(local_entity)
        result.outgoing.append(local_entity)

    result.merged = sorted(combined, key=_sort_key)
    return result


def merge[T: Versioned](local: Iterable[T], remote: Iterable[T]) -> list[T]:
    """Return the merged collection of ``local`` and ``remote``."""

    return reconcile(local, remote).merged


__all__ = ["MergeResult", "merge", "reconcile"]

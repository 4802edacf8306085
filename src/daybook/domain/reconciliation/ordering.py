"""Explicit reorder operations.

Merging never renumbers ``sort_order``; only these user-driven operations do.
Records whose position changes are touched so the new order wins the next merge.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from daybook.domain.dates import utcnow

if TYPE_CHECKING:
    from collections.abc import Sequence

    from daybook.domain.dates import Clock
    from daybook.domain.model import VersionedEntity


def append_position(entities: Sequence[VersionedEntity]) -> int:
    """Position for a record appended to the end of ``entities``."""
    return len(entities)


def renumber[T: VersionedEntity](entities: Sequence[T], *, clock: Clock = utcnow) -> list[T]:
    """Assign contiguous positions ``0..n-1`` following the current sequence order.

    Returns a new list; entities whose position changed are updated in place.
    """

    ordered = list(entities)
    for index, entity in enumerate(ordered):
        if entity.sort_order != index:
            entity.sort_order = index
            entity.touch(clock=clock)
    return ordered


def move[T: VersionedEntity](
    entities: Sequence[T],
    source: int,
    destination: int,
    *,
    clock: Clock = utcnow,
) -> list[T]:
    """Move the record at ``source`` so it ends up at index ``destination``."""

    size = len(entities)
    if not 0 <= source < size:
        raise IndexError(f"Source index {source} out of range for {size} records")
    if not 0 <= destination < size:
        raise IndexError(f"Destination index {destination} out of range for {size} records")
    ordered = sorted(entities, key=lambda entity: entity.sort_order)
    moved = ordered.pop(source)
    ordered.insert(destination, moved)
    return renumber(ordered, clock=clock)


__all__ = ["append_position", "move", "renumber"]

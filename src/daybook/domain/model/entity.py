"""
Base building blocks:
identity, last-write-wins versioning and display ordering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable
from uuid import UUID, uuid4

from daybook.domain.dates import ensure_aware, utcnow

if TYPE_CHECKING:
    from datetime import datetime

    from daybook.domain.dates import Clock
    from daybook.domain.model.enums import EntityType
    from daybook.domain.model.primitives import RemoteRef


def new_id() -> UUID:
    return uuid4()


@runtime_checkable
class Versioned(Protocol):
    """Structural contract the reconciliation engine relies on."""

    @property
    def id(self) -> UUID: ...

    @property
    def last_modified(self) -> datetime: ...

    @property
    def sort_order(self) -> int: ...


@dataclass(eq=False, kw_only=True)
class VersionedEntity:
    """Identity exists immediately in the domain; ``remote_ref`` arrives with the first save."""

    id: UUID = field(default_factory=new_id)
    last_modified: datetime = field(default_factory=utcnow)
    sort_order: int = 0
    remote_ref: RemoteRef | None = None

    # class-level discriminator; subclasses must override
    ENTITY_TYPE: ClassVar[EntityType]

    def __post_init__(self) -> None:
        self.last_modified = ensure_aware(self.last_modified)

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE

    @property
    def is_persisted(self) -> bool:
        return self.remote_ref is not None

    def touch(self, *, clock: Clock = utcnow) -> datetime:
        """Record a local mutation. ``last_modified`` never moves backward."""
        now = clock()
        if now > self.last_modified:
            self.last_modified = now
        return self.last_modified

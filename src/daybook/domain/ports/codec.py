"""Record serialization port used by store adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from daybook.domain.model import VersionedEntity

if TYPE_CHECKING:
    from daybook.domain.model import EntityType

type Record = dict[str, Any]


class RecordDecodeError(ValueError):
    """Raised when a stored record cannot be turned back into an entity."""


@runtime_checkable
class Codec[TEntity: VersionedEntity](Protocol):
    """Translate one entity type to and from a JSON-compatible record."""

    @property
    def entity_type(self) -> EntityType: ...

    def to_record(self, entity: TEntity) -> Record: ...

    def from_record(self, record: Record) -> TEntity: ...


__all__ = ["Codec", "Record", "RecordDecodeError"]

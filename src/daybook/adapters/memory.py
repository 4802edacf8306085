"""Dict-backed store that round-trips entities through their codec."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from daybook.adapters.records import record_name
from daybook.domain.model import VersionedEntity
from daybook.domain.ports import DeleteRejected, RecordDecodeError, RemoteUnavailable

if TYPE_CHECKING:
    from daybook.domain.model import RemoteRef
    from daybook.domain.ports import Codec, Record

log = getLogger(__name__)


class InMemoryStore[TEntity: VersionedEntity]:
    """Store keeping encoded records in memory.

    Entities handed out are always fresh copies, so callers never share state
    with the store. ``online = False`` makes every call fail with
    ``RemoteUnavailable``.
    """

    def __init__(self, codec: Codec[TEntity]) -> None:
        self.codec = codec
        self.online = True
        self._records: dict[RemoteRef, Record] = {}

    def __len__(self) -> int:
        return len(self._records)

    def fetch_all(self) -> list[TEntity]:
        self._ensure_online()
        entities: list[TEntity] = []
        for ref, record in self._records.items():
            try:
                entity = self.codec.from_record(record)
            except RecordDecodeError as exc:
                log.warning("Skipping undecodable record %s: %s", ref, exc)
                continue
            entity.remote_ref = ref
            entities.append(entity)
        return entities

    def save(self, entity: TEntity) -> TEntity:
        self._ensure_online()
        ref = record_name(self.codec.entity_type, entity.id)
        record = self.codec.to_record(entity)
        self._records[ref] = record
        stored = self.codec.from_record(record)
        stored.remote_ref = ref
        return stored

    def delete(self, ref: RemoteRef) -> None:
        self._ensure_online()
        if self._records.pop(ref, None) is None:
            raise DeleteRejected(f"No record named {ref}")

    def put_record(self, ref: RemoteRef, record: Record) -> None:
        """Store a raw record as another device would have written it."""
        self._records[ref] = record

    def _ensure_online(self) -> None:
        if not self.online:
            raise RemoteUnavailable("In-memory store is offline")


if TYPE_CHECKING:
    from daybook.adapters.records import ItemCodec
    from daybook.domain.model import Item
    from daybook.domain.ports import Store

    _store_check: Store[Item] = InMemoryStore(ItemCodec())

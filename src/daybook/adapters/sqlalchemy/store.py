"""SQLAlchemy-backed store for versioned collections."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from daybook.adapters.records import record_name
from daybook.adapters.sqlalchemy.mappings import create_all_tables, record_table
from daybook.config import get_database_config
from daybook.domain.model import VersionedEntity
from daybook.domain.ports import (
    DeleteRejected,
    RecordDecodeError,
    RemoteUnavailable,
    SaveRejected,
    TransientFetchError,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from daybook.domain.model import RemoteRef
    from daybook.domain.ports import Codec

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call daybook.adapters.sqlalchemy."
                "store.startup() before creating a store."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def open_engine(database_uri: str) -> Engine:
    """Create an engine for ``database_uri`` and make sure the tables exist."""

    engine = create_engine(database_uri, future=True)
    create_all_tables(engine)
    return engine


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Initialise the managed (local) engine and its tables."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )
    if engine is not None:
        create_all_tables(engine)
        resolved_engine = engine
    else:
        resolved_engine = open_engine(database_uri or get_database_config().uri)
    _STATE.engine = resolved_engine
    return resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class SqlAlchemyStore[TEntity: VersionedEntity]:
    """Store one entity type as JSON payload rows of the ``record`` table.

    Without an explicit ``engine`` the store uses the engine set up by ``startup``.
    """

    def __init__(self, codec: Codec[TEntity], *, engine: Engine | None = None) -> None:
        self.codec = codec
        if engine is None:
            self.session_factory = _STATE.session_factory
        else:
            self.session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    def fetch_all(self) -> list[TEntity]:
        stmt = (
            select(record_table.c.record_name, record_table.c.payload)
            .where(record_table.c.entity_type == self.codec.entity_type)
            .order_by(record_table.c.sort_order)
        )
        try:
            with self.session_factory() as session:
                rows = session.execute(stmt).all()
        except OperationalError as exc:
            if exc.connection_invalidated:
                raise TransientFetchError(
                    f"Connection dropped while reading {self.codec.entity_type} records"
                ) from exc
            raise RemoteUnavailable(f"Cannot read {self.codec.entity_type} records") from exc

        entities: list[TEntity] = []
        for ref, payload in rows:
            try:
                entity = self.codec.from_record(payload)
            except RecordDecodeError as exc:
                log.warning("Skipping undecodable record %s: %s", ref, exc)
                continue
            entity.remote_ref = ref
            entities.append(entity)
        return entities

    def save(self, entity: TEntity) -> TEntity:
        ref = record_name(self.codec.entity_type, entity.id)
        payload = self.codec.to_record(entity)
        values = {
            "last_modified": entity.last_modified,
            "sort_order": entity.sort_order,
            "payload": payload,
        }
        try:
            with self.session_factory.begin() as session:
                result = session.execute(
                    update(record_table).where(record_table.c.record_name == ref).values(**values)
                )
                if result.rowcount == 0:
                    session.execute(
                        insert(record_table).values(
                            record_name=ref,
                            entity_type=self.codec.entity_type,
                            entity_id=entity.id,
                            **values,
                        )
                    )
        except IntegrityError as exc:
            raise SaveRejected(f"Record {ref} was rejected") from exc
        except OperationalError as exc:
            raise RemoteUnavailable(f"Cannot write record {ref}") from exc

        stored = self.codec.from_record(payload)
        stored.remote_ref = ref
        return stored

    def delete(self, ref: RemoteRef) -> None:
        try:
            with self.session_factory.begin() as session:
                result = session.execute(
                    delete(record_table).where(record_table.c.record_name == ref)
                )
        except OperationalError as exc:
            raise RemoteUnavailable(f"Cannot delete record {ref}") from exc
        if result.rowcount == 0:
            raise DeleteRejected(f"No record named {ref}")


if TYPE_CHECKING:
    from daybook.adapters.records import ItemCodec
    from daybook.domain.model import Item
    from daybook.domain.ports import Store

    _store_check: Store[Item] = SqlAlchemyStore(ItemCodec())

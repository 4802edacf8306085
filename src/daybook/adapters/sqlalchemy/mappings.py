"""SQLAlchemy table metadata for persisted entity records."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from daybook.domain.model import EntityType

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "pk": "pk_%(table_name)s",
    }
)

# One row per entity; the codec payload is opaque to the database.
record_table = Table(
    "record",
    metadata,
    Column("record_name", String, primary_key=True),
    Column("entity_type", Enum(EntityType, native_enum=False), nullable=False, index=True),
    Column("entity_id", UUIDColumnType, nullable=False),
    Column("last_modified", UTCDateTime, nullable=False),
    Column("sort_order", Integer, nullable=False, default=0),
    Column("payload", JSON, nullable=False),
    UniqueConstraint("entity_type", "entity_id"),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)

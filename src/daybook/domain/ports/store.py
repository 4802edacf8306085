"""Ports for persisting versioned collections remotely."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from daybook.domain.model import VersionedEntity

if TYPE_CHECKING:
    from daybook.domain.model import RemoteRef


class StoreError(RuntimeError):
    """Base class for failures raised by store adapters."""


class RemoteUnavailable(StoreError):
    """Raised when the backing store cannot be reached at all."""


class TransientFetchError(StoreError):
    """Raised when a fetch failed but may succeed if retried later."""


class SaveRejected(StoreError):
    """Raised when the store refuses to persist a record."""


class DeleteRejected(StoreError):
    """Raised when the store refuses (or cannot find) a record to delete."""


@runtime_checkable
class Store[TEntity: VersionedEntity](Protocol):
    """Persistence contract for one entity type.

    ``save`` is idempotent by entity id and returns the stored entity with
    ``remote_ref`` populated.
    """

    def fetch_all(self) -> list[TEntity]: ...

    def save(self, entity: TEntity) -> TEntity: ...

    def delete(self, ref: RemoteRef) -> None: ...


__all__ = [
    "DeleteRejected",
    "RemoteUnavailable",
    "SaveRejected",
    "Store",
    "StoreError",
    "TransientFetchError",
]

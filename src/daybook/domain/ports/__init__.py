"""Domain port definitions for adapters."""

from __future__ import annotations

from .codec import Codec, Record, RecordDecodeError
from .store import (
    DeleteRejected,
    RemoteUnavailable,
    SaveRejected,
    Store,
    StoreError,
    TransientFetchError,
)

__all__ = [
    "Codec",
    "DeleteRejected",
    "Record",
    "RecordDecodeError",
    "RemoteUnavailable",
    "SaveRejected",
    "Store",
    "StoreError",
    "TransientFetchError",
]

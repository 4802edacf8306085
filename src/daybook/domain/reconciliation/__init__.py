"""Reconciliation core for local-first collections.

One generic last-write-wins merge replaces a per-entity merge routine; every
collection that follows the ``Versioned`` contract (id, last_modified,
sort_order) is reconciled by the same code.
"""

from __future__ import annotations

from .merge import MergeResult, merge, reconcile
from .ordering import append_position, move, renumber

__all__ = [
    "MergeResult",
    "append_position",
    "merge",
    "move",
    "reconcile",
    "renumber",
]

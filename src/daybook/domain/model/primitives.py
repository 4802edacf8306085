"""Domain primitives: scalar aliases.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

# Opaque handle minted by a store on first save; the domain only threads it through.
type RemoteRef = str
type DayKey = str

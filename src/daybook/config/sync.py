"""Synchronization defaults for entity managers."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag

DEFAULT_PUSH_AFTER_MERGE = True


@dataclass(frozen=True, slots=True)
class SyncConfig:
    push_after_merge: bool = DEFAULT_PUSH_AFTER_MERGE


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        push_after_merge=env_flag("DAYBOOK_PUSH_AFTER_MERGE", default=DEFAULT_PUSH_AFTER_MERGE)
    )

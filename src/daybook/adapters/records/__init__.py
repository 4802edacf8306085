"""Record schemas and codecs shared by store adapters."""

from __future__ import annotations

from .codecs import (
    CODECS,
    CategoryCodec,
    HabitCodec,
    HabitCompletionCodec,
    ItemCodec,
    RecordCodec,
    RoutineProgressCodec,
    RoutineTemplateCodec,
    codec_for,
    record_name,
)

__all__ = [
    "CODECS",
    "CategoryCodec",
    "HabitCodec",
    "HabitCompletionCodec",
    "ItemCodec",
    "RecordCodec",
    "RoutineProgressCodec",
    "RoutineTemplateCodec",
    "codec_for",
    "record_name",
]

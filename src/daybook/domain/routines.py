"""Daily routine runs seeded from templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from daybook.domain.dates import as_day
from daybook.domain.model import RoutineProgress

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime

    from daybook.domain.model import RoutineKind, RoutineTemplate


def progress_for(
    progresses: Iterable[RoutineProgress],
    day: date | datetime,
    kind: RoutineKind,
) -> RoutineProgress | None:
    target = as_day(day)
    return next((entry for entry in progresses if entry.day == target and entry.kind == kind), None)


def template_for(templates: Iterable[RoutineTemplate], kind: RoutineKind) -> RoutineTemplate | None:
    return next((entry for entry in templates if entry.kind == kind and entry.is_enabled), None)


def missing_progress(
    progresses: Iterable[RoutineProgress],
    templates: Iterable[RoutineTemplate],
    day: date | datetime,
) -> list[RoutineProgress]:
    """Fresh runs for every enabled template that has none on ``day`` yet."""

    target = as_day(day)
    existing = list(progresses)
    created: list[RoutineProgress] = []
    for template in templates:
        if not template.is_enabled:
            continue
        if progress_for(existing, target, template.kind) is not None:
            continue
        if any(entry.kind == template.kind for entry in created):
            continue
        created.append(RoutineProgress.from_template(template, target))
    return created


__all__ = ["missing_progress", "progress_for", "template_for"]

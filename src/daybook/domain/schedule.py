"""Which items show up on a given day, and in what order."""

from __future__ import annotations

from datetime import time
from typing import TYPE_CHECKING

from daybook.domain.dates import as_day, utcnow
from daybook.domain.recurrence import occurs_on

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date, datetime
    from uuid import UUID

    from daybook.domain.dates import Clock
    from daybook.domain.model import Item


def _chronological_key(item: Item) -> tuple[bool, time, int]:
    # timed items first, by time; untimed ones keep their manual position
    return (item.assigned_time is None, item.assigned_time or time.min, item.sort_order)


def scheduled_on(items: Iterable[Item], day: date | datetime) -> list[Item]:
    """Items whose assigned date, or one of its recurrences, falls on ``day``."""

    target = as_day(day)
    return [item for item in items if occurs_on(item.recurrence, item.assigned_date, target)]


def items_for_date(items: Iterable[Item], day: date | datetime) -> list[Item]:
    """Items for ``day`` in display order.

    Once any of them was manually reordered for that day the manual order wins;
    otherwise items are listed chronologically.
    """

    target = as_day(day)
    scheduled = scheduled_on(items, target)
    if any(item.has_custom_order(target) for item in scheduled):
        return sorted(scheduled, key=lambda item: item.sort_order)
    return sorted(scheduled, key=_chronological_key)


def reorder_for_date(
    items: Sequence[Item],
    day: date | datetime,
    ordered_ids: Sequence[UUID],
    *,
    clock: Clock = utcnow,
) -> list[Item]:
    """Return the whole collection with ``day``'s items placed in ``ordered_ids`` order.

    The day's items swap into the slots they already occupy, so items of other
    days keep their positions. The reordered items are flagged as custom-ordered
    for ``day``. Positions are not renumbered; hand the result to the manager.
    """

    target = as_day(day)
    collection = sorted(items, key=lambda item: item.sort_order)
    on_day = {item.id: item for item in scheduled_on(collection, target)}
    if set(ordered_ids) != set(on_day) or len(ordered_ids) != len(on_day):
        raise ValueError("Ordered ids must list every item scheduled for the day exactly once")

    replacements = iter([on_day[item_id] for item_id in ordered_ids])
    result = [next(replacements) if item.id in on_day else item for item in collection]
    for item in on_day.values():
        item.set_custom_order(target, enabled=True)
        item.touch(clock=clock)
    return result


def reset_custom_order(
    items: Iterable[Item],
    day: date | datetime,
    *,
    clock: Clock = utcnow,
) -> list[Item]:
    """Drop the manual-order flag for ``day``; returns the items that changed."""

    target = as_day(day)
    changed: list[Item] = []
    for item in scheduled_on(items, target):
        if item.has_custom_order(target):
            item.set_custom_order(target, enabled=False)
            item.touch(clock=clock)
            changed.append(item)
    return changed


__all__ = ["items_for_date", "reorder_for_date", "reset_custom_order", "scheduled_on"]

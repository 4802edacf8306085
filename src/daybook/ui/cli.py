# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, timedelta
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from daybook.app import sync_entity_type
from daybook.config import configure_logging
from daybook.domain.model import EntityType, Frequency, RecurrencePattern
from daybook.domain.recurrence import describe, next_occurrence, occurrences_in_range

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_RANGE_DAYS = 365


def _add_pattern_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--frequency",
        choices=[frequency.value for frequency in Frequency],
        required=True,
        help="How often the item repeats",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=1,
        help="Repeat every N units of the frequency (default: %(default)s)",
    )
    parser.add_argument(
        "--base",
        type=str,
        required=True,
        help="ISO-8601 date of the first occurrence",
    )
    end = parser.add_mutually_exclusive_group()
    end.add_argument(
        "--until",
        type=str,
        help="ISO-8601 date of the last possible occurrence",
    )
    end.add_argument(
        "--count",
        type=int,
        help="Stop after this many occurrences",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Daybook recurrence and sync tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    occurrences = subparsers.add_parser("occurrences", help="List occurrence dates in a range")
    _add_pattern_arguments(occurrences)
    occurrences.add_argument(
        "--start",
        type=str,
        help="ISO-8601 date starting the inclusive range (defaults to --base)",
    )
    occurrences.add_argument(
        "--end",
        type=str,
        help=f"ISO-8601 date ending the inclusive range (defaults to {DEFAULT_RANGE_DAYS} days "
        "after the start)",
    )

    following = subparsers.add_parser("next", help="Show the next occurrence after a date")
    _add_pattern_arguments(following)
    following.add_argument(
        "--after",
        type=str,
        help="ISO-8601 date; the occurrence must fall strictly after it (defaults to today)",
    )

    sync = subparsers.add_parser("sync", help="Merge a local collection with the remote store")
    sync.add_argument(
        "entity",
        choices=[entity_type.value for entity_type in EntityType],
        help="Collection to synchronise",
    )
    sync.add_argument(
        "--remote-uri",
        type=str,
        help="Database URI of the remote store (defaults to DAYBOOK_REMOTE_URI)",
    )
    sync.add_argument(
        "--no-push",
        action="store_true",
        help="Only merge the remote snapshot; do not push local changes",
    )

    return parser.parse_args(list(argv))


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _build_pattern(args: argparse.Namespace) -> RecurrencePattern:
    return RecurrencePattern.from_fields(
        args.frequency,
        args.interval,
        end_date=_parse_iso_date(args.until) if args.until else None,
        max_occurrences=args.count,
    )


def _run_occurrences(args: argparse.Namespace) -> None:
    pattern = _build_pattern(args)
    base = _parse_iso_date(args.base)
    start = _parse_iso_date(args.start) if args.start else base
    end = _parse_iso_date(args.end) if args.end else start + timedelta(days=DEFAULT_RANGE_DAYS)
    log.debug("Expanding %s from %s over %s..%s", describe(pattern), base, start, end)
    for day in occurrences_in_range(pattern, base, start, end):
        print(day.isoformat())


def _run_next(args: argparse.Namespace, *, today: Callable[[], date] = date.today) -> None:
    pattern = _build_pattern(args)
    base = _parse_iso_date(args.base)
    after = _parse_iso_date(args.after) if args.after else today()
    found = next_occurrence(pattern, base, after)
    print(found.isoformat() if found else "none")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "occurrences":
            _run_occurrences(parsed_args)
        elif parsed_args.command == "next":
            _run_next(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync":
            report = sync_entity_type(
                parsed_args.entity,
                remote_uri=parsed_args.remote_uri,
                push=False if parsed_args.no_push else None,
            )
            if not report.ok:
                log.error("Sync finished with %s error(s)", len(report.errors))
                sys.exit(1)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

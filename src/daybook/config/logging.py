"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# SQLAlchemy logs every statement at INFO once its engine logger is enabled.
_SQL_LOGGER = "sqlalchemy.engine"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Send log records to stderr using a terse, timestamped format.

    SQL statement logging stays off unless ``level`` is DEBUG. Pass ``force=True``
    to replace handlers installed by an earlier call (tests do this).
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    logging.getLogger(_SQL_LOGGER).setLevel(
        logging.INFO if level <= logging.DEBUG else logging.WARNING
    )

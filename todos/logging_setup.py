# todos/logging_setup.py

from __future__ import annotations

import logging
import sys


class _AppOnlyFilter(logging.Filter):
    """
    Keep the console readable:
    - todos.* logs pass at the configured level
    - third-party noise (sqlalchemy, ...) only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("todos."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Configure a single stderr handler so log lines never mix with the
    Rich output on stdout.

    Call this once, early in the CLI callback.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_AppOnlyFilter())
    root.addHandler(ch)

"""Logging setup for the API process."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO", *, sql_debug: bool = False) -> None:
    """Install a single stream handler on the root logger.

    Calling this more than once only adjusts the level. The SQLAlchemy engine
    logger stays at WARNING unless SQL echo was requested.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(getattr(handler, "_tourit", False) for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._tourit = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    if not sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

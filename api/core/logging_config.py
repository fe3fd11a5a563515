"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only decides where
records go and at which level.
"""

from __future__ import annotations

import logging
import sys

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or config.log_level()), logging.INFO))

    # Replace handlers so repeated calls (tests, reloads) do not duplicate output.
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    logging.getLogger("asyncpg").setLevel(logging.WARNING)

"""Logging setup for the server and the headless runner."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from statecraft.config import SimulationConfig

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-30s | %(message)s"


def setup_logging(config: SimulationConfig) -> None:
    """Route every logger to stdout at ``config.log_level``.

    Loggers named in ``config.quiet_loggers`` are held at WARNING unless the
    run itself is at DEBUG, so per-request access lines do not drown the
    tick output.
    """
    numeric_level = getattr(logging, config.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    quiet_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in config.quiet_loggers:
        logging.getLogger(name).setLevel(quiet_level)

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int | str = "INFO") -> None:
    """
    Configure the root logger once, for command-line entry points.

    No-op if the root logger already has handlers. Library modules only create
    loggers via `logging.getLogger(__name__)` and never call this.
    """
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
    else:
        lvl = int(level)

    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=lvl, format=LOG_FORMAT)

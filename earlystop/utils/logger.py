# earlystop/utils/logger.py

"""Logging setup for monitored runs.

One console handler for live stop diagnostics, plus an optional file handler
so a run's stop decisions can be archived next to its outputs. Library modules
log to children of the "earlystop" logger and never add handlers themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logger(name: str = "earlystop",
                 level: str = "INFO",
                 log_file: Optional[str] = None) -> logging.Logger:
    """Configure `name` once; later calls return it unchanged apart from the level."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for h in handlers:
        h.setFormatter(fmt)
        logger.addHandler(h)
    logger.propagate = False
    return logger

# earlystop/learning/observers.py

"""Diagnostic observers.

An observer is any callable taking (step, state); `step` counts out-of-sample
updates. Observers are only called at verbosity >= 1 and never influence stop
decisions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from earlystop.learning.logging_utils import append_csv_row


class LoggingObserver:
    """Report each step to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("earlystop")

    def __call__(self, step: int, state: Any) -> None:
        self.logger.info(f"step={step} state={state}")


class CsvObserver:
    """Append each step to a CSV file (one row per observation)."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def __call__(self, step: int, state: Any) -> None:
        append_csv_row(self.path, {"step": step, "state": repr(state)})

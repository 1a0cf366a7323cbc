# earlystop/errors.py

"""Error taxonomy.

- ConfigurationError: malformed criterion parameters, detected at construction.
- ProtocolError: observations submitted in an order the criterion cannot accept.

Numeric edge cases (NaN losses, zero denominators) are not errors; every
criterion defines its behavior for them.
"""

from __future__ import annotations


class EarlyStoppingError(Exception):
    """Base class for all earlystop errors."""


class ConfigurationError(EarlyStoppingError, ValueError):
    """Invalid criterion parameters or stopper configuration."""


class ProtocolError(EarlyStoppingError, RuntimeError):
    """Observation sequencing mistake (e.g. an unexpected training loss)."""

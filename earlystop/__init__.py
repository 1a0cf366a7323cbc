"""earlystop: pluggable early-stopping criteria for iterative training.

- Criteria: Never, NotANumber, OutOfBounds, TimeLimit, NumberLimit, Threshold,
  NumberSinceBest, Patience, UP, GL, PQ, combined with Disjunction
- Offline: stopping_time / simulate over a recorded loss sequence
- Online: EarlyStopper inside a live training loop
"""

from earlystop.criteria import (
    GL,
    PQ,
    UP,
    Disjunction,
    Never,
    NotANumber,
    NumberLimit,
    NumberSinceBest,
    OutOfBounds,
    Patience,
    StoppingCriterion,
    Threshold,
    TimeLimit,
)
from earlystop.criteria.factory import build_criterion, build_stopper
from earlystop.errors import ConfigurationError, EarlyStoppingError, ProtocolError
from earlystop.learning.callbacks import EarlyStopper
from earlystop.simulation import SimulationResult, simulate, stopping_time

__version__ = "0.1.0"

__all__ = [
    "StoppingCriterion",
    "Never",
    "NotANumber",
    "OutOfBounds",
    "TimeLimit",
    "NumberLimit",
    "Threshold",
    "NumberSinceBest",
    "Patience",
    "UP",
    "GL",
    "PQ",
    "Disjunction",
    "EarlyStopper",
    "stopping_time",
    "simulate",
    "SimulationResult",
    "build_criterion",
    "build_stopper",
    "EarlyStoppingError",
    "ConfigurationError",
    "ProtocolError",
]

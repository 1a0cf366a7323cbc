"""Stopping criteria.

Every criterion implements the protocol in `earlystop.criteria.base`:
initialize / update (out-of-sample), initialize_training / update_training,
done and message. `Disjunction` combines criteria with logical OR.
"""

from earlystop.criteria.base import StoppingCriterion
from earlystop.criteria.disjunction import UNINITIALIZED, Disjunction, firing_criterion
from earlystop.criteria.generalization import GL, PQ, generalization_loss, training_progress
from earlystop.criteria.patience import UP, NumberSinceBest, Patience
from earlystop.criteria.simple import (
    Never,
    NotANumber,
    NumberLimit,
    OutOfBounds,
    Threshold,
    TimeLimit,
)

__all__ = [
    "StoppingCriterion",
    "Disjunction",
    "UNINITIALIZED",
    "firing_criterion",
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
    "generalization_loss",
    "training_progress",
]

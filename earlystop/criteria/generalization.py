# earlystop/criteria/generalization.py

"""Generalization-loss criteria (Prechelt, "Early Stopping - But When?", 1998).

- GL_alpha: stop when the generalization loss exceeds alpha.
- PQ_alpha: stop when generalization loss divided by training progress exceeds alpha.

    GL(t)  = 100 * (E_va(t) / E_opt(t) - 1)
    P_k(t) = 1000 * (mean of last k training losses / their minimum - 1)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from earlystop.criteria.base import StoppingCriterion
from earlystop.criteria.simple import require_positive
from earlystop.errors import ConfigurationError


def generalization_loss(loss: float, best: float) -> float:
    """Relative excess (in percent) of `loss` over the best loss seen so far."""
    if best == 0:
        return 0.0 if loss == 0 else math.inf
    return 100.0 * (loss / best - 1.0)


def training_progress(losses: Sequence[float]) -> float:
    """Prechelt's P_k over a strip of training losses.

    Returns 0.0 when progress is undefined (empty strip, non-positive minimum).
    """
    if not losses:
        return 0.0
    lowest = min(losses)
    if not lowest > 0:
        return 0.0
    mean = sum(losses) / len(losses)
    return 1000.0 * (mean / lowest - 1.0)


def _best(loss: float, best: Optional[float]) -> Optional[float]:
    if best is None:
        return None if math.isnan(loss) else float(loss)
    return float(loss) if loss < best else best


@dataclass(frozen=True)
class GLState:
    loss: float
    min_loss: Optional[float]


@dataclass(frozen=True)
class GL(StoppingCriterion):
    """Stop when the generalization loss exceeds `alpha` (percent)."""

    alpha: float = 2.0

    def __post_init__(self):
        require_positive("alpha", self.alpha)

    def initialize(self, loss):
        return GLState(loss=float(loss), min_loss=_best(loss, None))

    def update(self, loss, state):
        return GLState(loss=float(loss), min_loss=_best(loss, state.min_loss))

    def done(self, state) -> bool:
        if state.min_loss is None:
            return False
        return generalization_loss(state.loss, state.min_loss) > self.alpha

    def message(self, state) -> str:
        if state.min_loss is None:
            return super().message(state)
        gl = generalization_loss(state.loss, state.min_loss)
        return f"Stopping early as generalization loss {gl:.4g} exceeded {self.alpha:g}."


@dataclass(frozen=True)
class PQState:
    loss: Optional[float]
    min_loss: Optional[float]
    training_losses: Tuple[float, ...]


@dataclass(frozen=True)
class PQ(StoppingCriterion):
    """Stop when the progress-modified generalization loss GL / P_k exceeds `alpha`.

    `k` is the number of most recent training losses used for P_k. The rule is
    only checked once an out-of-sample loss exists and at least `k` training
    losses have been recorded. A training progress of zero (a flat strip)
    never triggers a stop.
    """

    alpha: float = 0.75
    k: int = 5

    needs_training_losses = True

    def __post_init__(self):
        require_positive("alpha", self.alpha)
        if isinstance(self.k, bool) or not isinstance(self.k, int) or self.k < 2:
            raise ConfigurationError(f"`k` must be an integer greater than 1, got {self.k!r}")

    def initialize(self, loss):
        return PQState(loss=float(loss), min_loss=_best(loss, None), training_losses=())

    def update(self, loss, state):
        return PQState(loss=float(loss), min_loss=_best(loss, state.min_loss),
                       training_losses=state.training_losses)

    def initialize_training(self, loss):
        return PQState(loss=None, min_loss=None, training_losses=(float(loss),))

    def update_training(self, loss, state):
        training_losses = (state.training_losses + (float(loss),))[-self.k:]
        return PQState(loss=state.loss, min_loss=state.min_loss, training_losses=training_losses)

    def quotient(self, state) -> Optional[float]:
        """GL / P_k, or None when the rule cannot be evaluated this step."""
        if state.loss is None or state.min_loss is None or len(state.training_losses) < self.k:
            return None
        progress = training_progress(state.training_losses)
        if not (progress > 0 and math.isfinite(progress)):
            return None
        return generalization_loss(state.loss, state.min_loss) / progress

    def done(self, state) -> bool:
        pq = self.quotient(state)
        return pq is not None and pq > self.alpha

    def message(self, state) -> str:
        if self.quotient(state) is None:
            return super().message(state)
        return f"Stopping early as progress-modified generalization loss {self.quotient(state):.4g} exceeded {self.alpha:g}."

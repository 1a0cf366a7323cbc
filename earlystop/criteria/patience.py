# earlystop/criteria/patience.py

"""Criteria counting non-improving out-of-sample updates.

Improvement is always strict (`<`): an equal loss is not an improvement, and a
NaN loss never becomes the best loss.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from earlystop.criteria.base import StoppingCriterion
from earlystop.criteria.simple import require_positive_int


@dataclass(frozen=True)
class NumberSinceBestState:
    best: float
    number_since_best: int


@dataclass(frozen=True)
class NumberSinceBest(StoppingCriterion):
    """Stop when the best loss so far occurred `n` updates ago."""

    n: int = 6

    def __post_init__(self):
        require_positive_int("n", self.n)

    def initialize(self, loss):
        return NumberSinceBestState(best=float(loss), number_since_best=0)

    def update(self, loss, state):
        if loss < state.best:
            return NumberSinceBestState(best=float(loss), number_since_best=0)
        return NumberSinceBestState(best=state.best, number_since_best=state.number_since_best + 1)

    def done(self, state) -> bool:
        return state.number_since_best >= self.n

    def message(self, state) -> str:
        return f"Stopping early as best loss {state.best:g} occurred {state.number_since_best} updates ago."


@dataclass(frozen=True)
class PatienceState:
    loss: float
    n_increases: int


@dataclass(frozen=True)
class Patience(StoppingCriterion):
    """Stop after `n` consecutive strict increases of the loss.

    Any update that is not an increase resets the count to zero.
    """

    n: int = 5

    def __post_init__(self):
        require_positive_int("n", self.n)

    def initialize(self, loss):
        return PatienceState(loss=float(loss), n_increases=0)

    def update(self, loss, state):
        n_increases = state.n_increases + 1 if loss > state.loss else 0
        return PatienceState(loss=float(loss), n_increases=n_increases)

    def done(self, state) -> bool:
        return state.n_increases == self.n

    def message(self, state) -> str:
        return f"Stopping early as loss increased {self.n} times in a row."


@dataclass(frozen=True)
class UPState:
    n_updates: int
    strip_loss: Optional[float]
    n_increasing_strips: int


@dataclass(frozen=True)
class UP(StoppingCriterion):
    """Prechelt's UP_s: stop after `s` consecutive strips ending in an increase.

    A strip is `k` consecutive out-of-sample updates; the loss at the end of a
    strip is compared with the loss at the end of the previous strip. With
    `k=1` every update closes a strip.
    """

    s: int = 5
    k: int = 1

    def __post_init__(self):
        require_positive_int("s", self.s)
        require_positive_int("k", self.k)

    def initialize(self, loss):
        return self._fold(loss, UPState(n_updates=0, strip_loss=None, n_increasing_strips=0))

    def update(self, loss, state):
        return self._fold(loss, state)

    def _fold(self, loss, state: UPState) -> UPState:
        n_updates = state.n_updates + 1
        if n_updates % self.k:
            return UPState(n_updates, state.strip_loss, state.n_increasing_strips)
        increased = state.strip_loss is not None and loss > state.strip_loss
        n_increasing = state.n_increasing_strips + 1 if increased else 0
        return UPState(n_updates, float(loss), n_increasing)

    def done(self, state) -> bool:
        return state.n_increasing_strips >= self.s

    def message(self, state) -> str:
        return f"Stopping early as loss increased over {self.s} consecutive strips of length {self.k}."

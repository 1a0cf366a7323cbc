# earlystop/criteria/simple.py

"""Criteria that need no running statistics over the loss history.

Never, NotANumber and OutOfBounds, TimeLimit, NumberLimit, Threshold.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Callable, Optional, Union

from earlystop.criteria.base import StoppingCriterion
from earlystop.errors import ConfigurationError


def require_positive_int(name: str, value) -> int:
    """Fail fast on counts that are not strictly positive integers."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"`{name}` must be a positive integer, got {value!r}")
    return value


def require_positive(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
        raise ConfigurationError(f"`{name}` must be positive, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class Never(StoppingCriterion):
    """Never stop."""

    needs_loss = False


@dataclass(frozen=True)
class NotANumber(StoppingCriterion):
    """Stop as soon as the out-of-sample loss is NaN."""

    def initialize(self, loss):
        return float(loss)

    def update(self, loss, state):
        return float(loss)

    def done(self, state) -> bool:
        return math.isnan(state)

    def message(self, state) -> str:
        return "Stopping early as NaN encountered."


@dataclass(frozen=True)
class OutOfBoundsState:
    out_of_bounds: bool


@dataclass(frozen=True)
class OutOfBounds(StoppingCriterion):
    """Stop once any out-of-sample loss has been NaN, inf or -inf.

    Unlike NotANumber the flag is sticky: later finite losses do not clear it.
    """

    def initialize(self, loss):
        return OutOfBoundsState(out_of_bounds=not math.isfinite(loss))

    def update(self, loss, state):
        return OutOfBoundsState(out_of_bounds=state.out_of_bounds or not math.isfinite(loss))

    def done(self, state) -> bool:
        return state.out_of_bounds

    def message(self, state) -> str:
        return "Stopping early as NaN, inf or -inf encountered."


@dataclass(frozen=True)
class TimeLimitState:
    start: float
    last: float


@dataclass(frozen=True)
class TimeLimit(StoppingCriterion):
    """Stop once the wall time elapsed since the first observation reaches `t`.

    `t` is in hours (a float) or a `datetime.timedelta`. The clock is read when
    an observation is folded in, so `done` itself never touches the clock.
    """

    t: Union[float, timedelta] = 0.5
    clock: Callable[[], float] = field(default=time.time, repr=False, compare=False)

    needs_loss = False

    def __post_init__(self):
        if isinstance(self.t, timedelta):
            if self.t.total_seconds() <= 0:
                raise ConfigurationError(f"Time limit `t` must be positive, got {self.t!r}")
        else:
            require_positive("t", self.t)

    @property
    def seconds(self) -> float:
        if isinstance(self.t, timedelta):
            return self.t.total_seconds()
        return float(self.t) * 3600.0

    def initialize(self, loss=None):
        now = self.clock()
        return TimeLimitState(start=now, last=now)

    def update(self, loss, state):
        return replace(state, last=self.clock())

    def done(self, state) -> bool:
        return state.last - state.start >= self.seconds

    def message(self, state) -> str:
        elapsed = (state.last - state.start) / 3600.0
        return f"Stopping early as time limit of {self.seconds / 3600.0:g} hours reached ({elapsed:.4f} hours elapsed)."


@dataclass(frozen=True)
class NumberLimit(StoppingCriterion):
    """Stop after `n` out-of-sample updates; training losses are not counted."""

    n: int = 100

    needs_loss = False

    def __post_init__(self):
        require_positive_int("n", self.n)

    def initialize(self, loss=None):
        return 1

    def update(self, loss, state):
        return state + 1

    def done(self, state) -> bool:
        return state >= self.n

    def message(self, state) -> str:
        return f"Stopping early as number of loss updates reached {self.n}."


@dataclass(frozen=True)
class Threshold(StoppingCriterion):
    """Stop when the loss drops below `value`."""

    value: float = 0.0

    def initialize(self, loss):
        return float(loss)

    def update(self, loss, state):
        return float(loss)

    def done(self, state) -> bool:
        return state < self.value

    def message(self, state) -> str:
        return f"Stopping early as loss {state:g} fell below threshold {self.value:g}."

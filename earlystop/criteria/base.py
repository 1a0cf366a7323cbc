# earlystop/criteria/base.py

"""Stopping-criterion protocol.

A criterion is an immutable policy object. It never stores observations itself;
instead it maps observations to an opaque, immutable *state*:

- initialize(loss)                 -> state   (first out-of-sample observation)
- update(loss, state)              -> state   (later out-of-sample observations)
- initialize_training(loss)        -> state   (first observation is a training loss)
- update_training(loss, state)     -> state   (training losses between updates)
- done(state)                      -> bool    (pure, safe to call repeatedly)
- message(state)                   -> str

Only criteria with `needs_training_losses = True` accept training observations.
"""

from __future__ import annotations

from typing import Any, Optional

from earlystop.errors import ProtocolError


class StoppingCriterion:
    """Base class for all criteria. Subclasses override the operations they use."""

    needs_training_losses = False
    needs_loss = True

    def initialize(self, loss: Optional[float]) -> Any:
        return None

    def update(self, loss: Optional[float], state: Any) -> Any:
        return state

    def initialize_training(self, loss: float) -> Any:
        raise ProtocolError(f"{self!r} does not accept training losses")

    def update_training(self, loss: float, state: Any) -> Any:
        raise ProtocolError(f"{self!r} does not accept training losses")

    def done(self, state: Any) -> bool:
        return False

    def message(self, state: Any) -> str:
        return f"Early stop triggered by {self!r} stopping criterion."

    def __add__(self, other):
        """`a + b` is shorthand for `Disjunction(a, b)`."""
        if not isinstance(other, StoppingCriterion):
            return NotImplemented
        from earlystop.criteria.disjunction import Disjunction  # disjunction imports this module
        return Disjunction(self, other)

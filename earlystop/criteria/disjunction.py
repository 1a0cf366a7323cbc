# earlystop/criteria/disjunction.py

"""Logical-OR composition of criteria.

The state of a Disjunction is the tuple of member states, in member order.
Each member only ever sees its own substate. Members are initialized lazily:
a member that does not need training losses stays UNINITIALIZED until the
first out-of-sample observation arrives.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from earlystop.criteria.base import StoppingCriterion
from earlystop.errors import ConfigurationError, ProtocolError


class _Uninitialized:
    def __repr__(self) -> str:
        return "UNINITIALIZED"


UNINITIALIZED = _Uninitialized()


class Disjunction(StoppingCriterion):
    """Stop when any member criterion says stop.

    Nested disjunctions are flattened, so `Disjunction(a, Disjunction(b, c))`
    is the same criterion as `Disjunction(a, b, c)`.
    """

    __slots__ = ("_criteria",)

    def __init__(self, *criteria: StoppingCriterion):
        flat = []
        for c in criteria:
            if isinstance(c, Disjunction):
                flat.extend(c.criteria)
            elif isinstance(c, StoppingCriterion):
                flat.append(c)
            else:
                raise ConfigurationError(f"Not a stopping criterion: {c!r}")
        if not flat:
            raise ConfigurationError("Disjunction needs at least one criterion")
        object.__setattr__(self, "_criteria", tuple(flat))

    def __setattr__(self, name, value):
        raise AttributeError("Disjunction is immutable")

    @property
    def criteria(self) -> Tuple[StoppingCriterion, ...]:
        return self._criteria

    @property
    def needs_training_losses(self) -> bool:
        return any(c.needs_training_losses for c in self._criteria)

    @property
    def needs_loss(self) -> bool:
        return any(c.needs_loss for c in self._criteria)

    def __repr__(self) -> str:
        return f"Disjunction({', '.join(repr(c) for c in self._criteria)})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Disjunction) and self._criteria == other._criteria

    def __hash__(self) -> int:
        return hash(self._criteria)

    def __len__(self) -> int:
        return len(self._criteria)

    def __iter__(self):
        return iter(self._criteria)

    def initialize(self, loss):
        return tuple(c.initialize(loss) for c in self._criteria)

    def update(self, loss, state):
        return tuple(
            c.initialize(loss) if s is UNINITIALIZED else c.update(loss, s)
            for c, s in zip(self._criteria, state)
        )

    def initialize_training(self, loss):
        if not self.needs_training_losses:
            raise ProtocolError(f"{self!r} does not accept training losses")
        return tuple(
            c.initialize_training(loss) if c.needs_training_losses else UNINITIALIZED
            for c in self._criteria
        )

    def update_training(self, loss, state):
        if not self.needs_training_losses:
            raise ProtocolError(f"{self!r} does not accept training losses")
        new_state = []
        for c, s in zip(self._criteria, state):
            if not c.needs_training_losses:
                new_state.append(s)
            elif s is UNINITIALIZED:
                new_state.append(c.initialize_training(loss))
            else:
                new_state.append(c.update_training(loss, s))
        return tuple(new_state)

    def fired(self, state) -> Optional[Tuple[StoppingCriterion, Any]]:
        """First member (and its substate) that says stop, in member order."""
        for c, s in zip(self._criteria, state):
            if s is not UNINITIALIZED and c.done(s):
                return c, s
        return None

    def done(self, state) -> bool:
        return self.fired(state) is not None

    def message(self, state) -> str:
        hit = self.fired(state)
        if hit is None:
            return super().message(state)
        c, s = hit
        return c.message(s)


def firing_criterion(criterion: StoppingCriterion, state) -> Optional[Tuple[StoppingCriterion, Any]]:
    """(criterion, substate) responsible for a stop, or None if `state` is not a stop."""
    if isinstance(criterion, Disjunction):
        return criterion.fired(state)
    return (criterion, state) if criterion.done(state) else None

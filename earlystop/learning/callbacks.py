# earlystop/learning/callbacks.py

"""Online early stopping.

`EarlyStopper` owns one criterion (several are combined into a Disjunction) and
the criterion's current state. Feed it one observation per call:

    stopper = EarlyStopper(Patience(n=3), GL(alpha=2.0))
    for epoch in range(max_epochs):
        ...
        if stopper.done(val_loss):
            logger.info(stopper.message())
            break

A stopper is not thread-safe: interleaved calls would corrupt counters such as
Patience's consecutive-increase count.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from earlystop.criteria.base import StoppingCriterion
from earlystop.criteria.disjunction import Disjunction, firing_criterion
from earlystop.errors import ConfigurationError, ProtocolError
from earlystop.learning.observers import LoggingObserver
from earlystop.utils.tensor_utils import to_scalar_loss


class EarlyStopper:
    def __init__(self,
                 *criteria: StoppingCriterion,
                 verbosity: int = 0,
                 observer: Optional[Callable[[int, Any], None]] = None,
                 logger: Optional[logging.Logger] = None):
        if not criteria:
            raise ConfigurationError("EarlyStopper needs at least one stopping criterion")
        self.criterion = criteria[0] if len(criteria) == 1 else Disjunction(*criteria)
        if not isinstance(self.criterion, StoppingCriterion):
            raise ConfigurationError(f"Not a stopping criterion: {self.criterion!r}")
        self.verbosity = verbosity
        self.logger = logger or logging.getLogger("earlystop")
        self.observer = observer or LoggingObserver(self.logger)

        self._state: Any = None
        self._initialized = False
        self._n_updates = 0
        self._fired: Optional[Tuple[StoppingCriterion, Any]] = None

    @property
    def state(self) -> Any:
        return self._state

    @property
    def n_updates(self) -> int:
        """Number of out-of-sample observations recorded so far."""
        return self._n_updates

    @property
    def fired(self) -> Optional[StoppingCriterion]:
        """Criterion that fired on the latest out-of-sample observation, if any."""
        return None if self._fired is None else self._fired[0]

    def done(self, loss: Any = None, training: bool = False) -> bool:
        """Record an observation and return True if training should stop.

        Training observations are folded in but never trigger a stop.
        """
        c = self.criterion
        if training and not c.needs_training_losses:
            raise ProtocolError(f"{c!r} does not use training losses")
        if loss is None:
            if c.needs_loss:
                raise ProtocolError(f"{c!r} needs a loss value")
        else:
            loss = to_scalar_loss(loss)

        if not self._initialized:
            state = c.initialize_training(loss) if training else c.initialize(loss)
        else:
            state = c.update_training(loss, self._state) if training else c.update(loss, self._state)
        self._state = state
        self._initialized = True
        if not training:
            self._n_updates += 1

        if self.verbosity >= 1:
            self.logger.info(f"{'training ' if training else ''}loss={loss}")
            self.observer(self._n_updates, state)

        if training:
            return False
        self._fired = firing_criterion(c, state)
        return self._fired is not None

    def message(self) -> str:
        """Explain the stop, naming the member criterion that fired."""
        if not self._initialized:
            raise ProtocolError("No losses recorded yet")
        if self._fired is not None:
            c, s = self._fired
            return c.message(s)
        return self.criterion.message(self._state)

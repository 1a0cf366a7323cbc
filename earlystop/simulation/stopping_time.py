# earlystop/simulation/stopping_time.py

"""Offline replay of a recorded loss sequence through one criterion.

Useful for tuning criteria on loss curves from finished runs: "with this
criterion, after how many validation updates would we have stopped?"

All bookkeeping lives in local variables and the returned SimulationResult,
so calls are re-entrant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from earlystop.criteria.base import StoppingCriterion
from earlystop.criteria.disjunction import firing_criterion
from earlystop.errors import ProtocolError
from earlystop.learning.observers import LoggingObserver
from earlystop.utils.tensor_utils import to_scalar_loss

logger = logging.getLogger("earlystop.simulation")


@dataclass(frozen=True)
class SimulationResult:
    t_stop: int                                # 1-based out-of-sample update of the stop, 0 if none
    n_updates: int                             # out-of-sample updates processed
    n_observations: int                        # entries consumed (training + out-of-sample)
    state: Any = None
    fired: Optional[StoppingCriterion] = None
    message: Optional[str] = None

    @property
    def stopped(self) -> bool:
        return self.t_stop > 0


def simulate(criterion: StoppingCriterion,
             losses: Sequence[Any],
             is_training: Optional[Sequence[bool]] = None,
             verbosity: int = 0,
             observer: Optional[Callable[[int, Any], None]] = None) -> SimulationResult:
    """Replay `losses` through `criterion`, stopping at the first stop signal."""
    losses = list(losses)
    if is_training is not None:
        is_training = [bool(x) for x in is_training]
        if len(is_training) != len(losses):
            raise ProtocolError(f"is_training has {len(is_training)} entries but losses has {len(losses)}")
        if any(is_training) and not criterion.needs_training_losses:
            raise ProtocolError(f"{criterion!r} does not use training losses")
    if verbosity >= 1 and observer is None:
        observer = LoggingObserver(logger)

    t = 0  # out-of-sample updates
    state = None
    for s, raw in enumerate(losses, start=1):
        training = is_training[s - 1] if is_training is not None else False
        if raw is None and criterion.needs_loss:
            raise ProtocolError(f"entry {s}: {criterion!r} needs a loss value")
        loss = None if raw is None else to_scalar_loss(raw)
        if s == 1:
            state = criterion.initialize_training(loss) if training else criterion.initialize(loss)
        else:
            state = criterion.update_training(loss, state) if training else criterion.update(loss, state)
        if not training:
            t += 1
        if verbosity >= 1:
            observer(t, state)
        if training:
            continue

        hit = firing_criterion(criterion, state)
        if hit is not None:
            c, sub = hit
            return SimulationResult(t_stop=t, n_updates=t, n_observations=s, state=state,
                                    fired=c, message=c.message(sub))

    return SimulationResult(t_stop=0, n_updates=t, n_observations=len(losses), state=state)


def stopping_time(criterion: StoppingCriterion,
                  losses: Sequence[Any],
                  is_training: Optional[Sequence[bool]] = None,
                  verbosity: int = 0,
                  observer: Optional[Callable[[int, Any], None]] = None) -> int:
    """Out-of-sample update count (1-based) at which `criterion` first stops; 0 if never.

    Training entries (is_training[i] True) are folded in but not counted.
    """
    return simulate(criterion, losses, is_training, verbosity=verbosity, observer=observer).t_stop

# earlystop/criteria/factory.py

"""Build criteria from plain config dicts (typically loaded from YAML).

    {"name": "PQ", "alpha": 2.0, "k": 2}
    {"name": "Disjunction", "criteria": [{"name": "Patience", "n": 5}, {"name": "TimeLimit", "t": 1.5}]}
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Type

from earlystop.criteria.base import StoppingCriterion
from earlystop.criteria.disjunction import Disjunction
from earlystop.criteria.generalization import GL, PQ
from earlystop.criteria.patience import UP, NumberSinceBest, Patience
from earlystop.criteria.simple import Never, NotANumber, NumberLimit, OutOfBounds, Threshold, TimeLimit
from earlystop.errors import ConfigurationError
from earlystop.learning.callbacks import EarlyStopper

CRITERIA: Dict[str, Type[StoppingCriterion]] = {
    c.__name__: c
    for c in (Never, NotANumber, OutOfBounds, TimeLimit, NumberLimit, Threshold,
              NumberSinceBest, Patience, UP, GL, PQ)
}


def build_criterion(spec: Mapping[str, Any] | str) -> StoppingCriterion:
    """Create one criterion from a name or a `{"name": ..., **params}` mapping."""
    if isinstance(spec, str):
        spec = {"name": spec}
    if not isinstance(spec, Mapping):
        raise ConfigurationError(f"Criterion spec must be a name or a mapping, got {spec!r}")
    params = dict(spec)
    name = params.pop("name", None)
    if name == "Disjunction":
        members = params.pop("criteria", [])
        if params:
            raise ConfigurationError(f"Unexpected keys for Disjunction: {sorted(params)}")
        if isinstance(members, (str, Mapping)) or not isinstance(members, Iterable):
            raise ConfigurationError(f"Disjunction criteria must be a list, got {members!r}")
        return build_disjunction(members)
    if name not in CRITERIA:
        raise ConfigurationError(f"Unknown stopping criterion {name!r}; expected one of {sorted(CRITERIA)}")
    try:
        return CRITERIA[name](**params)
    except TypeError as e:
        raise ConfigurationError(f"Bad parameters for {name}: {e}") from e


def build_disjunction(specs: Iterable[Mapping[str, Any] | str]) -> Disjunction:
    return Disjunction(*(build_criterion(s) for s in specs))


def build_stopper(cfg: Mapping[str, Any], logger=None) -> EarlyStopper:
    """Create an EarlyStopper from the `early_stopping` section of a config.

        early_stopping:
          verbosity: 1
          criteria:
            - {name: Patience, n: 5}
            - {name: TimeLimit, t: 2.0}
    """
    section = cfg.get("early_stopping", cfg)
    specs = section.get("criteria") or []
    if not specs:
        raise ConfigurationError("early_stopping.criteria must list at least one criterion")
    criteria = [build_criterion(s) for s in specs]
    return EarlyStopper(*criteria, verbosity=int(section.get("verbosity", 0)), logger=logger)

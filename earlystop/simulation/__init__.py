"""Offline simulation of stopping criteria over recorded losses."""

from earlystop.simulation.stopping_time import SimulationResult, simulate, stopping_time

__all__ = ["SimulationResult", "simulate", "stopping_time"]

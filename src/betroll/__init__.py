"""Betroll: stochastic bankroll simulation for repeated fixed-odds wagers."""

import logging

from betroll.engine import (
    SimulationResult,
    StakeComparison,
    compare_stakes,
    run_simulation,
)
from betroll.metrics.risk import risk_of_ruin
from betroll.sim.config import EngineSettings, SimulationParameters, StakeMode
from betroll.sim.outcomes import resolve_win_probability

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "EngineSettings",
    "SimulationParameters",
    "SimulationResult",
    "StakeComparison",
    "StakeMode",
    "compare_stakes",
    "resolve_win_probability",
    "risk_of_ruin",
    "run_simulation",
]

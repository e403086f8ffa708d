"""Simulation module for outcome and bankroll path generation."""

from betroll.sim.bankroll import simulate_bankroll, walk_bankroll
from betroll.sim.config import EngineSettings, SimulationParameters, StakeMode
from betroll.sim.history import TrajectoryPoint, downsample_history
from betroll.sim.outcomes import generate_outcomes, resolve_win_probability

__all__ = [
    "EngineSettings",
    "SimulationParameters",
    "StakeMode",
    "TrajectoryPoint",
    "downsample_history",
    "generate_outcomes",
    "resolve_win_probability",
    "simulate_bankroll",
    "walk_bankroll",
]

"""Simulation entry points.

``run_simulation`` draws one outcome sequence and feeds the same sequence to
the bankroll simulator, the statistics aggregator and the block analysis.
``compare_stakes`` evaluates several stake fractions over one shared draw.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from betroll.bridge.stats import (
    DriftDiffusion,
    calculate_drift_diffusion,
    wager_drift_diffusion,
)
from betroll.metrics.blocks import BlockStatistics, block_statistics
from betroll.metrics.risk import risk_of_ruin
from betroll.metrics.stats import GlobalStatistics, aggregate_statistics
from betroll.sim.bankroll import simulate_bankroll
from betroll.sim.config import EngineSettings, SimulationParameters
from betroll.sim.history import TrajectoryPoint, downsample_history
from betroll.sim.outcomes import generate_outcomes

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Everything one simulation run produces.

    Attributes:
        parameters: Inputs of the run.
        settings: Engine settings used.
        win_probability: Resolved per-trial win probability (not clamped).
        outcomes: The drawn outcome sequence shared by all consumers.
        trajectory: Downsampled return curve for display.
        statistics: Full-run statistics, including risk of ruin.
        blocks: Per-block statistics with the bankroll reset per block.
        theoretical_moments: Analytic drift/diffusion of the fixed stake.
        realized_moments: Sample drift/diffusion of the run (None if empty).
    """

    parameters: SimulationParameters
    settings: EngineSettings
    win_probability: float
    outcomes: NDArray[np.bool_]
    trajectory: list[TrajectoryPoint]
    statistics: GlobalStatistics
    blocks: list[BlockStatistics]
    theoretical_moments: DriftDiffusion
    realized_moments: DriftDiffusion | None

    @property
    def required_win_rate_pct(self) -> float:
        return self.win_probability * 100.0

    @property
    def risk_of_ruin_pct(self) -> float:
        return self.statistics.risk_of_ruin_pct


class StakeComparison(NamedTuple):
    """Result of one stake fraction evaluated over a shared outcome draw."""

    stake_fraction_pct: float
    statistics: GlobalStatistics
    trajectory: list[TrajectoryPoint]


def _evaluate_stake(
    outcomes: NDArray[np.bool_],
    parameters: SimulationParameters,
    settings: EngineSettings,
    win_probability: float,
) -> tuple[NDArray[np.float64], GlobalStatistics, list[TrajectoryPoint]]:
    """Run simulator, aggregator and ruin estimate for one stake fraction."""
    bankrolls = simulate_bankroll(
        outcomes,
        parameters.avg_odds,
        parameters.stake_fraction_pct,
        parameters.stake_mode,
        initial_bankroll=settings.initial_bankroll,
        stake_floor=settings.stake_floor,
    )
    trajectory = downsample_history(
        bankrolls,
        settings.initial_bankroll,
        max_points=settings.max_display_points,
        threshold=settings.downsample_threshold,
    )
    run_stats = aggregate_statistics(
        outcomes,
        parameters.avg_odds,
        parameters.stake_fraction_pct,
        parameters.stake_mode,
        initial_bankroll=settings.initial_bankroll,
        stake_floor=settings.stake_floor,
    )
    ruin_pct = risk_of_ruin(
        settings.initial_bankroll,
        parameters.stake_fraction_pct,
        parameters.avg_odds,
        win_probability,
    )
    statistics = GlobalStatistics.from_run(
        run_stats,
        risk_of_ruin_pct=ruin_pct,
        stake_fraction_pct=parameters.stake_fraction_pct,
    )
    return bankrolls, statistics, trajectory


def _draw(
    parameters: SimulationParameters,
    rng: np.random.Generator | None,
) -> tuple[float, NDArray[np.bool_]]:
    """Resolve the win probability and draw the shared outcome sequence."""
    win_probability = parameters.win_probability
    if not parameters.is_feasible:
        logger.warning(
            "Infeasible win probability %.4f for odds %.4f and target return %.2f%%",
            win_probability,
            parameters.avg_odds,
            parameters.target_return_pct,
        )

    if rng is None:
        rng = np.random.default_rng(parameters.seed)

    outcomes = generate_outcomes(win_probability, parameters.trial_count, rng)
    return win_probability, outcomes


def run_simulation(
    parameters: SimulationParameters,
    settings: EngineSettings | None = None,
    rng: np.random.Generator | None = None,
) -> SimulationResult:
    """Run one simulation and derive all statistics from a single draw.

    Args:
        parameters: Run inputs.
        settings: Engine settings (defaults to ``EngineSettings()``).
        rng: Random generator to draw from. When omitted, a new generator is
            seeded from ``parameters.seed``.

    Returns:
        A complete SimulationResult. Infeasible probabilities and empty runs
        produce a result rather than an exception.

    Example:
        >>> params = SimulationParameters(
        ...     avg_odds=1.70,
        ...     target_return_pct=3.0,
        ...     stake_fraction_pct=1.0,
        ...     trial_count=1000,
        ...     seed=42,
        ... )
        >>> result = run_simulation(params)
        >>> len(result.blocks)
        5
    """
    if settings is None:
        settings = EngineSettings()

    win_probability, outcomes = _draw(parameters, rng)
    bankrolls, statistics, trajectory = _evaluate_stake(
        outcomes, parameters, settings, win_probability
    )

    blocks = block_statistics(
        outcomes,
        settings.block_count,
        parameters.avg_odds,
        parameters.stake_fraction_pct,
        parameters.stake_mode,
        initial_bankroll=settings.initial_bankroll,
        stake_floor=settings.stake_floor,
    )

    unit_value = settings.unit_value(parameters.stake_fraction_pct)
    theoretical = wager_drift_diffusion(
        unit_value, parameters.avg_odds, win_probability
    )
    realized = (
        calculate_drift_diffusion(np.diff(bankrolls), stake=unit_value)
        if len(outcomes) > 0
        else None
    )

    logger.info(
        "Simulated %d trials (%s, stake %.2f%%): result %+.2fu, win rate %.2f%%, "
        "max drawdown %.2fu, risk of ruin %.2f%%",
        statistics.trial_count,
        parameters.stake_mode.value,
        parameters.stake_fraction_pct,
        statistics.final_result_units,
        statistics.win_rate_pct,
        statistics.max_drawdown_units,
        statistics.risk_of_ruin_pct,
    )

    return SimulationResult(
        parameters=parameters,
        settings=settings,
        win_probability=win_probability,
        outcomes=outcomes,
        trajectory=trajectory,
        statistics=statistics,
        blocks=blocks,
        theoretical_moments=theoretical,
        realized_moments=realized,
    )


def compare_stakes(
    parameters: SimulationParameters,
    stake_fractions: Sequence[float],
    settings: EngineSettings | None = None,
    rng: np.random.Generator | None = None,
) -> list[StakeComparison]:
    """Evaluate several stake fractions over one shared outcome sequence.

    The stake fraction in ``parameters`` is ignored; every entry of
    ``stake_fractions`` is run through the same simulator and aggregator
    against the same draw, so differences come from sizing alone.

    Args:
        parameters: Run inputs (odds, target return, volume, mode, seed).
        stake_fractions: Stake fractions to evaluate, in percent.
        settings: Engine settings (defaults to ``EngineSettings()``).
        rng: Random generator to draw from.

    Returns:
        One StakeComparison per stake fraction, in input order.

    Raises:
        ValueError: If stake_fractions is empty or contains a non-positive
            or non-finite value.
    """
    if len(stake_fractions) == 0:
        raise ValueError("stake_fractions cannot be empty")
    if any(not math.isfinite(f) or f <= 0 for f in stake_fractions):
        raise ValueError("stake fractions must be positive and finite")

    if settings is None:
        settings = EngineSettings()

    win_probability, outcomes = _draw(parameters, rng)

    comparisons = []
    for fraction in stake_fractions:
        stake_params = replace(parameters, stake_fraction_pct=fraction)
        _, statistics, trajectory = _evaluate_stake(
            outcomes, stake_params, settings, win_probability
        )
        comparisons.append(
            StakeComparison(
                stake_fraction_pct=fraction,
                statistics=statistics,
                trajectory=trajectory,
            )
        )

    logger.info(
        "Compared %d stake fractions over %d trials", len(comparisons), len(outcomes)
    )
    return comparisons

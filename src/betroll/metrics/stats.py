"""Performance statistics for a simulated outcome sequence.

This module folds one outcome sequence into aggregate figures: realized
return, win rate, drawdown, streaks, final bankroll and amount wagered.
Drawdown and result are expressed in units, where one unit is the stake
fraction of the initial bankroll.
"""

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from betroll.sim.bankroll import walk_bankroll
from betroll.sim.config import StakeMode


class RunStatistics(NamedTuple):
    """Aggregate statistics for one (mini-)run."""

    final_result_units: float
    realized_return_pct: float
    win_rate_pct: float
    max_drawdown_units: float
    max_win_streak: int
    max_loss_streak: int
    final_bankroll: float
    total_wagered: float
    trial_count: int
    wins: int


class GlobalStatistics(NamedTuple):
    """Full-run statistics, including the analytic risk of ruin."""

    final_result_units: float
    realized_return_pct: float
    win_rate_pct: float
    max_drawdown_units: float
    max_win_streak: int
    max_loss_streak: int
    final_bankroll: float
    total_wagered: float
    trial_count: int
    wins: int
    risk_of_ruin_pct: float
    stake_fraction_pct: float

    @classmethod
    def from_run(
        cls,
        run: RunStatistics,
        risk_of_ruin_pct: float,
        stake_fraction_pct: float,
    ) -> "GlobalStatistics":
        """Attach full-run-only figures to run statistics."""
        return cls(
            *run,
            risk_of_ruin_pct=risk_of_ruin_pct,
            stake_fraction_pct=stake_fraction_pct,
        )

    @property
    def profit_pct_on_bankroll(self) -> float:
        """Final result as a percentage of the initial bankroll."""
        return self.final_result_units * self.stake_fraction_pct

    @property
    def max_drawdown_pct_on_bankroll(self) -> float:
        """Maximum drawdown as a percentage of the initial bankroll."""
        return self.max_drawdown_units * self.stake_fraction_pct


def longest_streaks(outcomes: NDArray[np.bool_]) -> tuple[int, int]:
    """Find the longest run of consecutive wins and of consecutive losses.

    Args:
        outcomes: Boolean outcome sequence (True = win).

    Returns:
        Tuple of (max_win_streak, max_loss_streak).

    Example:
        >>> longest_streaks(np.array([True, True, False, True, False, False, False]))
        (2, 3)
    """
    if len(outcomes) == 0:
        return 0, 0

    values = np.asarray(outcomes, dtype=bool)
    # Run boundaries: positions where the outcome changes
    change_points = np.flatnonzero(values[1:] != values[:-1]) + 1
    starts = np.concatenate(([0], change_points))
    lengths = np.diff(np.concatenate((starts, [len(values)])))
    run_is_win = values[starts]

    max_win = int(lengths[run_is_win].max()) if run_is_win.any() else 0
    max_loss = int(lengths[~run_is_win].max()) if (~run_is_win).any() else 0
    return max_win, max_loss


def drawdown_units(
    bankrolls: NDArray[np.float64],
    unit_value: float,
) -> NDArray[np.float64]:
    """Peak-to-current decline after every trial, in units.

    The running peak starts at the initial bankroll (index 0 of the path).

    Returns:
        NDArray of shape (n,) with the drawdown after each trial.
    """
    peaks = np.maximum.accumulate(bankrolls)
    if unit_value == 0:
        return np.zeros(len(bankrolls) - 1, dtype=np.float64)
    return (peaks[1:] - bankrolls[1:]) / unit_value


def aggregate_statistics(
    outcomes: NDArray[np.bool_],
    odds: float,
    stake_fraction_pct: float,
    mode: StakeMode,
    initial_bankroll: float = 1000.0,
    stake_floor: float = 0.01,
) -> RunStatistics:
    """Aggregate performance statistics for an outcome sequence.

    The bankroll always starts from ``initial_bankroll``, so calling this on
    a slice of a longer run treats the slice as an independent mini-run.

    Args:
        outcomes: Boolean outcome sequence (True = win).
        odds: Decimal odds.
        stake_fraction_pct: Percentage of the bankroll staked per trial.
        mode: Stake sizing policy.
        initial_bankroll: Bankroll before the first trial.
        stake_floor: Minimum compounding stake before the bankroll freezes.

    Returns:
        RunStatistics for the sequence. Win rate is 0 for an empty
        sequence and realized return is 0 when nothing was wagered.

    Example:
        >>> stats = aggregate_statistics(
        ...     np.array([False, False, False]), 2.0, 1.0, StakeMode.FIXED
        ... )
        >>> stats.final_result_units, stats.max_drawdown_units
        (-3.0, 3.0)
    """
    n_trials = len(outcomes)
    unit_value = initial_bankroll * (stake_fraction_pct / 100.0)

    bankrolls, stakes = walk_bankroll(
        outcomes,
        odds,
        stake_fraction_pct,
        mode,
        initial_bankroll=initial_bankroll,
        stake_floor=stake_floor,
    )

    final_bankroll = float(bankrolls[-1])
    total_wagered = float(np.sum(stakes))
    wins = int(np.count_nonzero(outcomes))
    net = final_bankroll - initial_bankroll
    realized_return = (net / total_wagered) * 100.0 if total_wagered > 0 else 0.0

    drawdowns = drawdown_units(bankrolls, unit_value)
    max_drawdown = float(drawdowns.max()) if n_trials > 0 else 0.0
    max_win_streak, max_loss_streak = longest_streaks(outcomes)

    return RunStatistics(
        final_result_units=net / unit_value if unit_value != 0 else 0.0,
        realized_return_pct=realized_return,
        win_rate_pct=(wins / n_trials) * 100.0 if n_trials > 0 else 0.0,
        max_drawdown_units=max(max_drawdown, 0.0),
        max_win_streak=max_win_streak,
        max_loss_streak=max_loss_streak,
        final_bankroll=final_bankroll,
        total_wagered=total_wagered,
        trial_count=n_trials,
        wins=wins,
    )

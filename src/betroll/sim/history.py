"""Downsampling of bankroll paths for display."""

import logging
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from betroll.sim.bankroll import returns_pct

logger = logging.getLogger(__name__)


class TrajectoryPoint(NamedTuple):
    """One displayed point of the return curve."""

    trial_index: int
    return_pct: float


def sample_indices(
    n_trials: int,
    max_points: int = 500,
    threshold: int = 2000,
) -> NDArray[np.int64]:
    """Select which trials to keep for display.

    Below ``threshold`` every trial is kept. Above it, every Nth trial is
    kept with N = n_trials // max_points, and the final trial is always
    appended.

    Returns:
        Sorted 1-based trial indices (excluding the starting point 0).
    """
    if n_trials <= 0:
        return np.array([], dtype=np.int64)

    stride = max(n_trials // max_points, 1) if n_trials > threshold else 1
    # Trial k + 1 is kept when k is a multiple of the stride
    kept = np.arange(0, n_trials, stride, dtype=np.int64) + 1
    if kept[-1] != n_trials:
        kept = np.append(kept, np.int64(n_trials))

    logger.debug(
        "Downsampled %d trials to %d points (stride %d)", n_trials, len(kept), stride
    )
    return kept


def downsample_history(
    bankrolls: NDArray[np.float64],
    initial_bankroll: float,
    max_points: int = 500,
    threshold: int = 2000,
) -> list[TrajectoryPoint]:
    """Reduce a full bankroll path to a bounded list of display points.

    Only the resolution of the displayed curve changes; statistics are
    always computed from the full path.

    Args:
        bankrolls: Full bankroll path of shape (n + 1,), index 0 = start.
        initial_bankroll: Reference bankroll for percentage returns.
        max_points: Approximate number of points to keep for long runs.
        threshold: Trial count above which thinning starts.

    Returns:
        List of TrajectoryPoint starting with (0, 0.0) and ending with the
        final trial.
    """
    n_trials = len(bankrolls) - 1
    indices = sample_indices(n_trials, max_points=max_points, threshold=threshold)
    returns = returns_pct(bankrolls[indices], initial_bankroll)

    points = [TrajectoryPoint(trial_index=0, return_pct=0.0)]
    points.extend(
        TrajectoryPoint(trial_index=int(idx), return_pct=float(ret))
        for idx, ret in zip(indices, returns)
    )
    return points


def trajectory_arrays(
    points: list[TrajectoryPoint],
) -> tuple[NDArray[np.int64], NDArray[np.float64]]:
    """Split trajectory points into x (trial index) and y (return %) arrays."""
    x_values = np.array([p.trial_index for p in points], dtype=np.int64)
    y_values = np.array([p.return_pct for p in points], dtype=np.float64)
    return x_values, y_values

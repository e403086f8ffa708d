"""Bridge between wager parameters and the drift-diffusion model.

This module converts a two-outcome wager (stake, odds, win probability) or a
realized sequence of per-trial profits into drift and diffusion constants,
which parameterize the Brownian approximation used for risk of ruin.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class DriftDiffusion:
    """Drift and diffusion constants of the per-trial profit process.

    Attributes:
        drift: Mean profit per trial (μ in the stochastic model).
        diffusion: Standard deviation per trial (σ in the stochastic model).
        n_samples: Number of trial results used (0 for analytic values).
        stake: Unit size used for normalization (if applicable).
    """

    drift: float
    diffusion: float
    n_samples: int
    stake: float | None = None

    @property
    def variance(self) -> float:
        """Per-trial profit variance (σ²)."""
        return self.diffusion**2

    @property
    def drift_units(self) -> float | None:
        """Drift expressed in units of stake.

        Returns:
            Mean profit per trial in units if stake is set, else None.
        """
        if self.stake is None or self.stake == 0:
            return None
        return self.drift / self.stake

    @property
    def diffusion_units(self) -> float | None:
        """Diffusion expressed in units of stake."""
        if self.stake is None or self.stake == 0:
            return None
        return self.diffusion / self.stake


def wager_profit_variance(stake: float, odds: float, win_probability: float) -> float:
    """Signed per-trial profit variance ``E[X²] - μ²`` of a fixed-stake wager.

    Negative only when ``win_probability`` lies outside [0, 1].
    """
    p = win_probability
    drift = stake * (p * (odds - 1.0) - (1.0 - p))
    mean_square = p * (stake * (odds - 1.0)) ** 2 + (1.0 - p) * stake**2
    return mean_square - drift**2


def wager_drift_diffusion(
    stake: float,
    odds: float,
    win_probability: float,
) -> DriftDiffusion:
    """Compute analytic drift and diffusion for a fixed-stake wager.

    The per-trial profit X is ``stake * (odds - 1)`` on a win and ``-stake``
    on a loss, so ``μ = stake * (p * (odds - 1) - (1 - p))`` and
    ``σ² = E[X²] - μ²``.

    Args:
        stake: Amount risked per trial.
        odds: Decimal odds.
        win_probability: Per-trial win probability.

    Returns:
        DriftDiffusion with ``n_samples = 0``.

    Example:
        >>> dd = wager_drift_diffusion(stake=10.0, odds=2.0, win_probability=0.5)
        >>> dd.drift, dd.diffusion
        (0.0, 10.0)
    """
    p = win_probability
    drift = stake * (p * (odds - 1.0) - (1.0 - p))
    # Floored for the reported diffusion only
    variance = max(wager_profit_variance(stake, odds, p), 0.0)

    return DriftDiffusion(
        drift=drift,
        diffusion=math.sqrt(variance),
        n_samples=0,
        stake=stake,
    )


def calculate_drift_diffusion(
    trial_profits: Sequence[float] | NDArray[np.float64],
    stake: float | None = None,
) -> DriftDiffusion:
    """Calculate realized drift and diffusion from per-trial profits.

    Args:
        trial_profits: Profit/loss of each trial. Positive values are wins.
        stake: Optional unit size for unit-normalized metrics.

    Returns:
        DriftDiffusion containing the sample mean and sample standard
        deviation (0.0 when only one trial is available).

    Raises:
        ValueError: If trial_profits is empty.

    Example:
        >>> dd = calculate_drift_diffusion([10.0, -10.0, 10.0, 10.0], stake=10.0)
        >>> dd.drift, dd.drift_units
        (5.0, 0.5)
    """
    if len(trial_profits) == 0:
        raise ValueError("trial_profits cannot be empty")

    results_array: NDArray[np.float64] = np.asarray(trial_profits, dtype=np.float64)

    drift = float(np.mean(results_array))
    diffusion = float(np.std(results_array, ddof=1)) if len(results_array) > 1 else 0.0

    return DriftDiffusion(
        drift=drift,
        diffusion=diffusion,
        n_samples=len(results_array),
        stake=stake,
    )

"""Analytic risk of ruin for a repeated fixed-stake wager.

The cumulative profit process is approximated by Brownian motion with drift,
for which the infinite-horizon probability of losing the whole bankroll is
``exp(-2 * B * μ / σ²)``.
"""

import math

from betroll.bridge.stats import wager_drift_diffusion, wager_profit_variance


def risk_of_ruin(
    initial_bankroll: float,
    stake_fraction_pct: float,
    odds: float,
    win_probability: float,
) -> float:
    """Estimate the probability of eventual ruin, in percent.

    The stake is taken as a fixed fraction of the initial bankroll. Under a
    compounding policy the figure is still reported, as a conservative
    reference for the strategy rather than an exact value.

    Args:
        initial_bankroll: Starting bankroll (B).
        stake_fraction_pct: Percentage of the initial bankroll staked per trial.
        odds: Decimal odds.
        win_probability: Per-trial win probability.

    Returns:
        Ruin probability in [0, 100]. Exactly 100 when the mean profit per
        trial is zero or negative, or when the variance is negative (a win
        probability above 1). Exactly 0 when there is no variance.

    Example:
        >>> risk_of_ruin(1000.0, 1.0, 2.0, 0.5)
        100.0
    """
    stake = initial_bankroll * (stake_fraction_pct / 100.0)
    moments = wager_drift_diffusion(stake, odds, win_probability)

    if moments.drift <= 0:
        return 100.0

    # Signed: an infeasible probability drives the exponent positive
    variance = wager_profit_variance(stake, odds, win_probability)
    if variance < 0:
        return 100.0
    if variance == 0:
        return 0.0

    ror = math.exp((-2.0 * initial_bankroll * moments.drift) / variance)
    return min(max(ror * 100.0, 0.0), 100.0)

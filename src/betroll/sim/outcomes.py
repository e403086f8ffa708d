"""Win probability resolution and Bernoulli outcome generation."""

import numpy as np
from numpy.typing import NDArray


def resolve_win_probability(avg_odds: float, target_return_pct: float) -> float:
    """Resolve the per-trial win probability implied by a target return.

    Expected return per unit staked is ``p * odds - 1``, so the probability
    needed for a given target is ``(target / 100 + 1) / odds``.

    The result is not clamped. A value outside [0, 1] means the requested
    odds/target combination is infeasible and is left for the caller to
    surface.

    Args:
        avg_odds: Average decimal odds.
        target_return_pct: Target return on amount wagered, in percent.

    Returns:
        Required win probability, or exactly 0.0 when ``avg_odds <= 0``.

    Example:
        >>> round(resolve_win_probability(1.70, 3.0), 4)
        0.6059
        >>> resolve_win_probability(2.0, 0.0)
        0.5
    """
    if avg_odds <= 0:
        return 0.0
    return (target_return_pct / 100.0 + 1.0) / avg_odds


def generate_outcomes(
    probability: float,
    count: int,
    rng: np.random.Generator,
) -> NDArray[np.bool_]:
    """Draw independent win/loss outcomes with a fixed win probability.

    A trial is a win iff a uniform draw in [0, 1) is strictly less than
    ``probability``.

    Args:
        probability: Per-trial win probability (may lie outside [0, 1]).
        count: Number of trials to draw.
        rng: Random generator to consume; pass a seeded one for reproducible
            sequences.

    Returns:
        Read-only boolean array of length ``count`` (True = win).

    Raises:
        ValueError: If count is negative.
    """
    if count < 0:
        raise ValueError("count cannot be negative")

    outcomes: NDArray[np.bool_] = rng.random(count) < probability
    # Shared by every consumer of one run
    outcomes.flags.writeable = False
    return outcomes

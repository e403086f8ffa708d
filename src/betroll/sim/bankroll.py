"""Bankroll evolution under a stake sizing policy.

This module walks a drawn outcome sequence and applies either a fixed stake
(fraction of the initial bankroll) or a compounding stake (fraction of the
current bankroll) to produce the bankroll after every trial.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from betroll.sim.config import StakeMode

logger = logging.getLogger(__name__)


def walk_bankroll(
    outcomes: NDArray[np.bool_],
    odds: float,
    stake_fraction_pct: float,
    mode: StakeMode,
    initial_bankroll: float = 1000.0,
    stake_floor: float = 0.01,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Apply the stake policy trial by trial.

    Under COMPOUNDING, once the computed stake drops below ``stake_floor``
    the stake is zero for that trial and every later one, so the bankroll
    stays flat for the rest of the run. Under FIXED the bankroll may go
    negative.

    Args:
        outcomes: Boolean outcome sequence (True = win).
        odds: Decimal odds; a win pays stake * (odds - 1).
        stake_fraction_pct: Percentage of the bankroll staked per trial.
        mode: Stake sizing policy.
        initial_bankroll: Bankroll before the first trial.
        stake_floor: Minimum compounding stake before the bankroll freezes.

    Returns:
        Tuple of (bankrolls, stakes). ``bankrolls`` has shape (n + 1,) with
        the initial bankroll at index 0; ``stakes`` has shape (n,) holding
        the amount actually risked on each trial.
    """
    n_trials = len(outcomes)
    fraction = stake_fraction_pct / 100.0
    fixed_stake = initial_bankroll * fraction
    net_odds = odds - 1.0

    bankrolls: NDArray[np.float64] = np.empty(n_trials + 1, dtype=np.float64)
    stakes: NDArray[np.float64] = np.zeros(n_trials, dtype=np.float64)
    bankrolls[0] = initial_bankroll

    current = initial_bankroll
    frozen = False
    for trial_idx in range(n_trials):
        if mode is StakeMode.FIXED:
            stake = fixed_stake
        elif frozen:
            stake = 0.0
        else:
            stake = current * fraction
            if stake < stake_floor:
                frozen = True
                stake = 0.0
                logger.debug(
                    "Stake below %.4f at trial %d; bankroll frozen at %.4f",
                    stake_floor,
                    trial_idx + 1,
                    current,
                )

        if outcomes[trial_idx]:
            current += stake * net_odds
        else:
            current -= stake

        stakes[trial_idx] = stake
        bankrolls[trial_idx + 1] = current

    return bankrolls, stakes


def simulate_bankroll(
    outcomes: NDArray[np.bool_],
    odds: float,
    stake_fraction_pct: float,
    mode: StakeMode,
    initial_bankroll: float = 1000.0,
    stake_floor: float = 0.01,
) -> NDArray[np.float64]:
    """Simulate the bankroll path for one outcome sequence.

    Args:
        outcomes: Boolean outcome sequence (True = win).
        odds: Decimal odds.
        stake_fraction_pct: Percentage of the bankroll staked per trial.
        mode: Stake sizing policy.
        initial_bankroll: Bankroll before the first trial.
        stake_floor: Minimum compounding stake before the bankroll freezes.

    Returns:
        NDArray of shape (n + 1,) with bankroll values; index 0 is the
        initial bankroll.

    Example:
        >>> path = simulate_bankroll(
        ...     np.array([True, False]), 2.0, 1.0, StakeMode.FIXED
        ... )
        >>> path.tolist()
        [1000.0, 1010.0, 1000.0]
    """
    bankrolls, _ = walk_bankroll(
        outcomes,
        odds,
        stake_fraction_pct,
        mode,
        initial_bankroll=initial_bankroll,
        stake_floor=stake_floor,
    )
    return bankrolls


def returns_pct(
    bankrolls: NDArray[np.float64],
    initial_bankroll: float,
) -> NDArray[np.float64]:
    """Convert bankroll values to percentage return since the start."""
    return (bankrolls - initial_bankroll) / initial_bankroll * 100.0

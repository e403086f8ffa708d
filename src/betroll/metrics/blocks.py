"""Block analysis: statistics on contiguous slices of one run."""

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from betroll.metrics.stats import RunStatistics, aggregate_statistics
from betroll.sim.config import StakeMode


class BlockStatistics(NamedTuple):
    """Statistics for one block, computed with the bankroll reset.

    ``start_trial`` and ``end_trial`` are 1-based and inclusive.
    """

    block_id: int
    start_trial: int
    end_trial: int
    stats: RunStatistics

    @property
    def result_units(self) -> float:
        return self.stats.final_result_units

    @property
    def win_rate_pct(self) -> float:
        return self.stats.win_rate_pct

    @property
    def realized_return_pct(self) -> float:
        return self.stats.realized_return_pct

    @property
    def max_drawdown_units(self) -> float:
        return self.stats.max_drawdown_units


def block_bounds(n_trials: int, block_count: int) -> list[tuple[int, int]]:
    """Compute [start, end) offsets for each block.

    Every block has ``n_trials // block_count`` trials except the last,
    which absorbs the remainder.

    Raises:
        ValueError: If block_count is less than 1.
    """
    if block_count < 1:
        raise ValueError("block_count must be at least 1")

    block_size = n_trials // block_count
    bounds = []
    for i in range(block_count):
        start = i * block_size
        end = n_trials if i == block_count - 1 else (i + 1) * block_size
        bounds.append((start, end))
    return bounds


def partition_outcomes(
    outcomes: NDArray[np.bool_],
    block_count: int,
) -> list[NDArray[np.bool_]]:
    """Split an outcome sequence into contiguous, exhaustive blocks.

    Args:
        outcomes: Boolean outcome sequence.
        block_count: Number of blocks to produce.

    Returns:
        List of exactly ``block_count`` slices whose concatenation equals
        ``outcomes``. Leading blocks are empty when there are fewer trials
        than blocks.

    Example:
        >>> [len(b) for b in partition_outcomes(np.zeros(12, dtype=bool), 5)]
        [2, 2, 2, 2, 4]
    """
    bounds = block_bounds(len(outcomes), block_count)
    return [outcomes[start:end] for start, end in bounds]


def block_statistics(
    outcomes: NDArray[np.bool_],
    block_count: int,
    odds: float,
    stake_fraction_pct: float,
    mode: StakeMode,
    initial_bankroll: float = 1000.0,
    stake_floor: float = 0.01,
) -> list[BlockStatistics]:
    """Aggregate each block as an independent mini-run.

    Each block starts again from ``initial_bankroll``, so its figures
    describe that sub-sequence alone rather than continuing earlier blocks.

    Returns:
        List of BlockStatistics ordered by block_id (1-based).
    """
    blocks = []
    bounds = block_bounds(len(outcomes), block_count)
    for block_idx, (start, end) in enumerate(bounds):
        stats = aggregate_statistics(
            outcomes[start:end],
            odds,
            stake_fraction_pct,
            mode,
            initial_bankroll=initial_bankroll,
            stake_floor=stake_floor,
        )
        blocks.append(
            BlockStatistics(
                block_id=block_idx + 1,
                start_trial=start + 1,
                end_trial=end,
                stats=stats,
            )
        )
    return blocks

"""Performance statistics and risk metrics module."""

from betroll.metrics.blocks import (
    BlockStatistics,
    block_statistics,
    partition_outcomes,
)
from betroll.metrics.risk import risk_of_ruin
from betroll.metrics.stats import (
    GlobalStatistics,
    RunStatistics,
    aggregate_statistics,
    longest_streaks,
)

__all__ = [
    "BlockStatistics",
    "GlobalStatistics",
    "RunStatistics",
    "aggregate_statistics",
    "block_statistics",
    "longest_streaks",
    "partition_outcomes",
    "risk_of_ruin",
]

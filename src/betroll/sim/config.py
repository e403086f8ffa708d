"""Configuration objects for the wager simulation engine.

Parameters describe one run (odds, target return, stake sizing, volume) while
settings hold the engine-level constants that are tunable but rarely changed.
"""

from dataclasses import dataclass
from enum import Enum

from betroll.sim.outcomes import resolve_win_probability


class StakeMode(Enum):
    """Stake sizing policy applied on every trial."""

    FIXED = "fixed"
    COMPOUNDING = "compounding"


@dataclass(frozen=True, slots=True)
class SimulationParameters:
    """Inputs for a single simulation run.

    Attributes:
        avg_odds: Average decimal odds (a winning stake returns stake * odds).
        target_return_pct: Target return on amount wagered, in percent.
        stake_fraction_pct: Percentage of the bankroll risked per trial.
        trial_count: Number of wagers to simulate.
        stake_mode: FIXED (fraction of initial) or COMPOUNDING (of current).
        seed: Random seed for reproducibility (None for random).
    """

    avg_odds: float
    target_return_pct: float
    stake_fraction_pct: float
    trial_count: int
    stake_mode: StakeMode = StakeMode.FIXED
    seed: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters.

        Odds are deliberately not validated: non-positive odds resolve to a
        zero win probability instead of failing.
        """
        if self.trial_count < 0:
            raise ValueError("trial_count cannot be negative")
        if self.stake_fraction_pct <= 0:
            raise ValueError("stake_fraction_pct must be positive")

    @property
    def win_probability(self) -> float:
        """Win probability needed to hit the target return at these odds."""
        return resolve_win_probability(self.avg_odds, self.target_return_pct)

    @property
    def required_win_rate_pct(self) -> float:
        """Required win probability expressed in percent."""
        return self.win_probability * 100.0

    @property
    def is_feasible(self) -> bool:
        """Whether the odds/target combination yields a valid probability."""
        return self.avg_odds > 0 and 0.0 <= self.win_probability <= 1.0


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Engine-wide constants.

    Attributes:
        initial_bankroll: Reference bankroll every run (and block) starts from.
        stake_floor: Compounding stakes below this amount freeze the bankroll.
        block_count: Number of contiguous blocks for intra-run analysis.
        max_display_points: Approximate point budget for the displayed curve.
        downsample_threshold: Trial count above which the curve is thinned.
    """

    initial_bankroll: float = 1000.0
    stake_floor: float = 0.01
    block_count: int = 5
    max_display_points: int = 500
    downsample_threshold: int = 2000

    def __post_init__(self) -> None:
        """Validate engine settings."""
        if self.initial_bankroll <= 0:
            raise ValueError("initial_bankroll must be positive")
        if self.stake_floor < 0:
            raise ValueError("stake_floor cannot be negative")
        if self.block_count < 1:
            raise ValueError("block_count must be at least 1")
        if self.max_display_points < 1:
            raise ValueError("max_display_points must be at least 1")
        if self.downsample_threshold < 0:
            raise ValueError("downsample_threshold cannot be negative")

    def unit_value(self, stake_fraction_pct: float) -> float:
        """Size of one unit: the stake fraction of the initial bankroll."""
        return self.initial_bankroll * (stake_fraction_pct / 100.0)

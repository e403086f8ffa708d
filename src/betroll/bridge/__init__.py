"""Bridge module from wager parameters to drift-diffusion constants."""

from betroll.bridge.stats import (
    DriftDiffusion,
    calculate_drift_diffusion,
    wager_drift_diffusion,
    wager_profit_variance,
)

__all__ = [
    "DriftDiffusion",
    "calculate_drift_diffusion",
    "wager_drift_diffusion",
    "wager_profit_variance",
]

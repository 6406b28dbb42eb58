"""Numeric helpers shared by the bandit, the rating updater and the store."""

from __future__ import annotations

import math
from collections.abc import Sequence

# Smoothing priors applied when turning raw counters into rates.
PICK_PRIOR_HITS = 5
PICK_PRIOR_TRIALS = 100
POST_PRIOR_HITS = 5
POST_PRIOR_TRIALS = 10


def is_finite_number(value: object) -> bool:
    """Return True for real numbers that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def _rescale(values: Sequence[float]) -> tuple[float, list[float]]:
    """Divide values by their largest magnitude so sums and squares stay in range."""
    scale = max((abs(v) for v in values), default=0.0)
    if scale == 0.0 or not math.isfinite(scale):
        return scale, [0.0] * len(values)
    return scale, [v / scale for v in values]


def population_mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    scale, scaled = _rescale(values)
    if scale == 0.0:
        return 0.0
    if not math.isfinite(scale):
        return math.fsum(values) / len(values)
    return scale * (math.fsum(scaled) / len(scaled))


def _scaled_std(scaled: Sequence[float]) -> tuple[float, float]:
    mean = math.fsum(scaled) / len(scaled)
    variance = math.fsum((v - mean) ** 2 for v in scaled) / len(scaled)
    return mean, math.sqrt(max(0.0, variance))


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N, not N - 1)."""
    if len(values) < 2:
        return 0.0
    scale, scaled = _rescale(values)
    if scale == 0.0 or not math.isfinite(scale):
        return 0.0
    return scale * _scaled_std(scaled)[1]


def z_scores(values: Sequence[float]) -> list[float]:
    """Standardize values against their own population.

    Z-scores are scale-free, so they are computed on values divided by the
    largest magnitude; huge finite rates cannot overflow the squares. Zero
    spread yields all zeros, so a fresh dictionary with identical statistics
    never produces NaN.

    Args:
        values: The population to standardize.

    Returns:
        One z-score per input value, in input order.
    """
    if len(values) < 2:
        return [0.0] * len(values)
    scale, scaled = _rescale(values)
    if scale == 0.0 or not math.isfinite(scale):
        return [0.0] * len(values)
    mean, std = _scaled_std(scaled)
    if std == 0.0:
        return [0.0] * len(values)
    return [(v - mean) / std for v in scaled]


def smoothed_pick_rate(served: int, picked: int) -> float:
    return (picked + PICK_PRIOR_HITS) / (served + PICK_PRIOR_TRIALS)


def smoothed_post_rate(picked: int, posted: int) -> float:
    return (posted + POST_PRIOR_HITS) / (picked + POST_PRIOR_TRIALS)

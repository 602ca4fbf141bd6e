"""
Numeric helpers shared by the aggregator, normalizer, and scorer.

All functions are pure.  Division-by-zero paths return ``None`` or a caller
supplied fallback instead of raising.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

WEIGHT_TOLERANCE = 1e-6
DISPLAY_DECIMALS = 1


def clamp(value: float, lo: float, hi: float) -> float:
    if math.isnan(value):
        raise ValueError("Cannot clamp NaN.")
    return max(lo, min(hi, value))


def mean(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or ``None`` for an empty iterable.

    Finite inputs always give a finite mean, even when their sum overflows.
    """
    items = list(values)
    if not items:
        return None
    try:
        return math.fsum(items) / len(items)
    except OverflowError:
        return math.fsum(x / len(items) for x in items)


def pct_change(first: float, last: float) -> Optional[float]:
    """Percentage change ``first -> last``; ``None`` when ``first`` is 0."""
    if first == 0:
        return None
    return (last - first) / first * 100.0


def inverted_min_max(value: float, lo: float, hi: float, scale: float = 10.0) -> float:
    """Map ``value`` onto [0, scale] where ``lo`` scores ``scale``.

    A zero range (all values equal) scores ``scale`` for everyone.

    Raises:
        ValueError: If any input is not finite.
    """
    if not all(math.isfinite(x) for x in (value, lo, hi)):
        raise ValueError(f"Cannot normalise non-finite input: {value} in [{lo}, {hi}].")
    spread = hi - lo
    if spread == 0:
        return scale
    return clamp((hi - value) / spread * scale, 0.0, scale)


def linear_scale(value: float, lo: float, hi: float, scale: float = 10.0) -> float:
    """Map ``value`` from the fixed domain [lo, hi] onto [0, scale], clamped."""
    return clamp((value - lo) / (hi - lo) * scale, 0.0, scale)


def sums_to_one(weights: Iterable[float], tolerance: float = WEIGHT_TOLERANCE) -> bool:
    return math.isclose(math.fsum(weights), 1.0, rel_tol=0.0, abs_tol=tolerance)


def round_display(value: float) -> float:
    """Round for presentation only; never feed the result back into scoring."""
    return round(value, DISPLAY_DECIMALS)

"""
Signal primitives: rounding, window means, dispersion, and delta classification.

Shared by the aggregator, confidence estimator, and drift detector.
All functions are pure, with no I/O.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

import numpy as np
import pandas as pd


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero (2.25 → 2.3, 62.5 → 63), unlike round()."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def round_int(value: float) -> int:
    return int(round_half_up(value, 0))


# ---------------------------------------------------------------------------
# Window statistics
# ---------------------------------------------------------------------------

def window_mean(values: pd.Series, start: int, stop: int) -> Optional[float]:
    """
    Mean of the recorded values at positions [start, stop).

    Missing values are skipped; None when the window holds none.
    """
    window = values.iloc[start:stop].dropna()
    if window.empty:
        return None
    return float(window.mean())


def trailing_means(values: pd.Series, window: int) -> pd.Series:
    """Rolling mean over the trailing `window` positions (NaN until full)."""
    return values.rolling(window, min_periods=window).mean()


def population_variance(values: np.ndarray) -> float:
    """
    Variance around the mean with divisor n.

    Returns 0.0 for fewer than two values, never NaN.
    """
    if len(values) < 2:
        return 0.0
    return float(np.var(values.astype(np.float64), ddof=0))


# ---------------------------------------------------------------------------
# Delta classification
# ---------------------------------------------------------------------------

def classify_delta(delta: float, threshold: float, labels=("improving", "stable", "declining")) -> str:
    """Map a signed difference to (up, flat, down) using a symmetric threshold."""
    up, flat, down = labels
    if delta > threshold:
        return up
    if delta < -threshold:
        return down
    return flat

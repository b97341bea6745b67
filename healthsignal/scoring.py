"""
Per-entry scoring: composite wellness score and emotional score.

Each function is a pure column transform: takes a DataFrame, returns it
with new columns appended. No cross-day logic here.

The composite score reads a missing 10-point field as 5. The aggregator
excludes missing values instead; the two policies stay separate.
"""

import numpy as np
import pandas as pd

from healthsignal.config import HealthSignalConfig


COMPOSITE_INPUTS = {
    "sleep_quality": "sleep_component",
    "stress_level": "stress_component",
    "diet_quality": "diet_component",
    "mood": "mood_component",
}


def compute_composite_scores(df: pd.DataFrame, cfg: HealthSignalConfig) -> pd.DataFrame:
    """
    composite = (sleep_quality + (10 - stress_level) + diet_quality + mood) / 4

    with every missing input read as the neutral default (5). The filled
    inputs are kept as `*_component` columns for factor attribution.
    """
    d = cfg.drift

    for source, target in COMPOSITE_INPUTS.items():
        df[target] = df[source].fillna(d.neutral_default)

    df["composite_score"] = (
        df["sleep_component"]
        + (d.scale_max - df["stress_component"])
        + df["diet_component"]
        + df["mood_component"]
    ) / 4.0

    return df


def compute_emotional_scores(df: pd.DataFrame, cfg: HealthSignalConfig) -> pd.DataFrame:
    """
    emotional = (10 - stress_level + mood) / 2 * 10, on a 0-100 scale.

    NaN wherever stress or mood was not recorded; no substitution.
    """
    cap = cfg.limits.scale_max
    df["emotional_score"] = np.where(
        df["stress_level"].notna() & df["mood"].notna(),
        (cap - df["stress_level"] + df["mood"]) / 2.0 * 10.0,
        np.nan,
    )
    return df

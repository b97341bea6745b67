"""
Confidence estimation: how far the derived insights can be trusted.

    overall = data_completeness * 0.4 + field_completeness * 0.4 + consistency * 0.2

- data_completeness: entry count against a 14-day ideal window
- field_completeness: share of the 7 core fields filled in, averaged per entry
- consistency: 100 - 10 * variance of sleep hours (0 with under two values)

Per-aspect certainties are categorical lookups on sample counts, declared in
config.DEFAULT_CERTAINTY_RULES.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from healthsignal.config import CertaintyRule, HealthSignalConfig
from healthsignal.entries import entries_frame
from healthsignal.models import Certainty, ConfidenceReport, DataTrust, HealthEntry
from healthsignal.signals import population_variance, round_int

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

def _qualifying(series: pd.Series) -> pd.Series:
    """Recorded, non-zero values."""
    return series[series.notna() & (series != 0)]


def data_completeness(n_entries: int, ideal: int) -> float:
    return min(100.0, n_entries / ideal * 100.0)


def field_completeness(df: pd.DataFrame, fields) -> float:
    """Mean over entries of the percentage of `fields` present."""
    if df.empty:
        return 0.0
    per_entry = df[list(fields)].notna().sum(axis=1) / len(fields) * 100.0
    return float(per_entry.mean())


def measurement_consistency(values: pd.Series, penalty: float) -> float:
    qualifying = _qualifying(values).to_numpy(dtype=np.float64)
    if len(qualifying) < 2:
        return 0.0
    return max(0.0, 100.0 - population_variance(qualifying) * penalty)


def evaluate_certainty(rule: CertaintyRule, count: int) -> Certainty:
    for min_count, score, tier in rule.gates:
        if count >= min_count:
            return Certainty(rule.aspect, score, tier)
    return Certainty(rule.aspect, rule.fallback_score, rule.fallback_tier)


def uncertainty_notes(
    overall: float,
    field_pct: float,
    consistency: float,
    n_entries: int,
    cfg: HealthSignalConfig,
) -> List[str]:
    """Each failing condition contributes one note, in a fixed order."""
    c = cfg.confidence
    notes = []
    if overall < c.low_overall:
        notes.append("Limited data history")
    if field_pct < c.low_field_completeness:
        notes.append("Incomplete daily entries")
    if consistency < c.low_consistency:
        notes.append("High data variability")
    if n_entries < c.min_trend_entries:
        notes.append("Insufficient trend data")
    return notes


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def compute_confidence(
    entries: Sequence[HealthEntry],
    cfg: HealthSignalConfig | None = None,
) -> Optional[ConfidenceReport]:
    """Confidence report for the given history; None when there are no entries."""
    if cfg is None:
        cfg = HealthSignalConfig()

    if not entries:
        log.debug("No entries; no confidence report")
        return None

    c = cfg.confidence
    w = c.weights
    df = entries_frame(entries)
    n = len(df)

    volume = data_completeness(n, c.ideal_entries)
    fields = field_completeness(df, c.completeness_fields)
    consistency = measurement_consistency(df[c.consistency_field], c.variance_penalty)

    overall = (
        volume * w.data_completeness
        + fields * w.field_completeness
        + consistency * w.consistency
    )
    overall = float(np.clip(overall, 0.0, 100.0))

    certainties = [
        evaluate_certainty(rule, int(len(_qualifying(df[rule.field]))))
        for rule in c.certainty_rules
    ]

    return ConfidenceReport(
        overall=round_int(overall),
        data_completeness=round_int(volume),
        field_completeness=round_int(fields),
        consistency=round_int(consistency),
        certainties=certainties,
        uncertainties=uncertainty_notes(overall, fields, consistency, n, cfg),
    )


def compute_data_trust(
    entries: Sequence[HealthEntry],
    cfg: HealthSignalConfig | None = None,
) -> Optional[DataTrust]:
    """
    Simpler trust meter: volume against the ideal window blended with
    five-field completeness. None when there are no entries.
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    if not entries:
        return None

    t = cfg.trust
    df = entries_frame(entries)
    volume = data_completeness(len(df), t.ideal_entries)
    completeness = field_completeness(df, t.fields)

    return DataTrust(
        overall=round_int(volume * t.volume_weight + completeness * t.completeness_weight),
        volume=round_int(volume),
        completeness=round_int(completeness),
        data_points=len(df),
    )

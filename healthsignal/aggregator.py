"""
Aggregator: per-field averages and the short-term mood trend.

Averages exclude missing values field by field. An empty history yields
None rather than a table of zeros.
"""

import logging
from typing import Optional, Sequence

import pandas as pd

from healthsignal.config import HealthSignalConfig, NUMERIC_FIELDS
from healthsignal.entries import entries_frame
from healthsignal.models import AggregateStats, HealthEntry
from healthsignal.signals import classify_delta, round_half_up, window_mean

log = logging.getLogger(__name__)


def field_averages(df: pd.DataFrame):
    """
    Return ({field: mean rounded to 0.1}, {field: recorded count}).

    A field nobody recorded averages to 0.0 with a count of 0.
    """
    averages = {}
    counts = {}
    for name in NUMERIC_FIELDS:
        present = df[name].dropna()
        counts[name] = int(len(present))
        averages[name] = round_half_up(present.mean(), 1) if len(present) else 0.0
    return averages, counts


def classify_weekly_trend(df: pd.DataFrame, cfg: HealthSignalConfig) -> str:
    """
    Compare the mean mood of the 3 newest entries with offsets 4-6.

    `df` must be ordered newest first. Only recorded moods are averaged.
    Fewer than 7 entries, or a window with no recorded mood, is "stable".
    """
    a = cfg.aggregator
    if len(df) < a.min_entries_for_trend:
        return "stable"

    mood = df["mood"]
    recent = window_mean(mood, *a.recent_window)
    older = window_mean(mood, *a.older_window)
    if recent is None or older is None:
        log.debug("No recorded mood in a trend window")
        return "stable"
    return classify_delta(recent - older, a.trend_threshold)


def compute_aggregate_stats(
    entries: Sequence[HealthEntry],
    cfg: HealthSignalConfig | None = None,
) -> Optional[AggregateStats]:
    """Averages, counts, latest entry and weekly trend; None for no entries."""
    if cfg is None:
        cfg = HealthSignalConfig()

    if not entries:
        log.debug("No entries; no aggregate stats")
        return None

    df = entries_frame(entries)
    averages, counts = field_averages(df)
    latest = max(entries, key=lambda e: e.date)

    return AggregateStats(
        averages=averages,
        field_counts=counts,
        total_entries=len(entries),
        latest_entry=latest,
        weekly_trend=classify_weekly_trend(df, cfg),
    )

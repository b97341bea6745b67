"""
Baseline drift detection.

A personal baseline is the mean composite score of the first three days.
Every later day is compared through a 3-day trailing mean; a sustained gap
of more than one point becomes a DriftEvent (improvement or decline) with a
single heuristic candidate factor.

Events are spaced out: an event must sit at least two entries after the
previous one, where the first anchor is the day right after the baseline.
"""

import logging
from typing import List, Optional, Sequence

import pandas as pd

from healthsignal.config import DriftParams, HealthSignalConfig
from healthsignal.entries import entries_frame
from healthsignal.models import DriftEvent, DriftReport, HealthEntry
from healthsignal.scoring import compute_composite_scores
from healthsignal.signals import round_half_up, trailing_means

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Factor attribution
# ---------------------------------------------------------------------------

def attribute_factor(row: pd.Series, direction: str, d: DriftParams) -> str:
    """
    First matching rule wins; the rule order is fixed.

    Reads the neutral-filled components, so a missing field counts as 5.
    """
    sleep = row["sleep_component"]
    if direction == "improvement":
        if sleep > d.high_factor:
            return "Better sleep"
        if row["diet_component"] > d.high_factor:
            return "Improved diet"
        return "Reduced stress"

    if row["stress_component"] > d.high_factor:
        return "Increased stress"
    if sleep < d.low_sleep:
        return "Poor sleep"
    return "Diet changes"


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def find_drift_events(df: pd.DataFrame, baseline: float, cfg: HealthSignalConfig) -> List[DriftEvent]:
    """Scan a chronologically ascending, scored frame for sustained deviations."""
    d = cfg.drift
    recent = trailing_means(df["composite_score"], d.window)

    events: List[DriftEvent] = []
    anchor = d.baseline_entries

    for i in range(d.baseline_entries, len(df)):
        deviation = float(recent.iloc[i]) - baseline
        if abs(deviation) <= d.deviation_threshold:
            continue
        if i - anchor < d.min_gap_entries:
            continue

        row = df.iloc[i]
        direction = "improvement" if deviation > 0 else "decline"
        event = DriftEvent(
            date=row["date"],
            direction=direction,
            magnitude=round_half_up(abs(deviation), 1),
            composite_score_at_point=round_half_up(row["composite_score"], 1),
            candidate_factors=(attribute_factor(row, direction, d),),
        )
        log.debug("Drift %s on %s (deviation %.2f)", direction, event.date, deviation)
        events.append(event)
        anchor = i

    return events


def detect_drift(
    entries: Sequence[HealthEntry],
    cfg: HealthSignalConfig | None = None,
) -> Optional[DriftReport]:
    """
    Drift report for the history, or None with fewer than 3 entries.

    Entry order does not matter; the history is sorted by date first.
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    d = cfg.drift
    if len(entries) < d.min_entries:
        log.debug("Drift needs %d entries, got %d", d.min_entries, len(entries))
        return None

    df = entries_frame(entries, ascending=True)
    df = compute_composite_scores(df, cfg)
    scores = df["composite_score"]

    baseline = float(scores.iloc[: d.baseline_entries].mean())
    current = float(scores.iloc[-1])

    if current > baseline:
        trend = "positive"
    elif current < baseline:
        trend = "negative"
    else:
        trend = "stable"

    timeline = [
        (day, round_half_up(score, 1))
        for day, score in zip(df["date"], scores)
    ]

    return DriftReport(
        baseline=round_half_up(baseline, 1),
        current_score=round_half_up(current, 1),
        trend=trend,
        days_since_start=(df["date"].iloc[-1] - df["date"].iloc[0]).days,
        events=find_drift_events(df, baseline, cfg),
        timeline=timeline,
    )

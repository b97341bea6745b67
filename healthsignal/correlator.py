"""
Pattern correlation: conditional means of one field given another.

For each configured pair, entries that recorded both fields are split on a
fixed threshold of the condition field. The outcome field's mean is compared
between the high and the low group; a gap of more than half a point, with
at least three entries on each side, becomes an insight.

Also hosts the mental/physical bridge, which reads the aggregator's
averages rather than raw entries.
"""

import logging
from typing import List, Optional, Sequence

import pandas as pd

from healthsignal.config import CorrelationRule, HealthSignalConfig
from healthsignal.entries import entries_frame
from healthsignal.models import (
    AggregateStats,
    BridgeConnection,
    BridgeReport,
    CorrelationInsight,
    HealthEntry,
)
from healthsignal.signals import round_half_up, round_int

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Conditional means
# ---------------------------------------------------------------------------

def _group_mean(values: pd.Series) -> float:
    return float(values.mean()) if len(values) else 0.0


def evaluate_rule(df: pd.DataFrame, rule: CorrelationRule, cfg: HealthSignalConfig) -> Optional[CorrelationInsight]:
    """Insight for one field pair, or None when the groups are too small or too close."""
    p = cfg.correlation
    cond = df[rule.condition_field]
    outcome = df[rule.outcome_field]
    paired = cond.notna() & outcome.notna()

    high_mask = paired & (cond >= rule.threshold)
    low_mask = paired & (cond < rule.threshold)
    high = outcome[high_mask]
    low = outcome[low_mask]

    if len(high) < p.min_group_size or len(low) < p.min_group_size:
        return None

    high_mean = _group_mean(high)
    low_mean = _group_mean(low)
    gap = high_mean - low_mean
    if abs(gap) <= p.min_difference:
        return None

    favourable = gap * rule.desirable > 0
    high_r = round_half_up(high_mean, 1)
    low_r = round_half_up(low_mean, 1)

    return CorrelationInsight(
        category=rule.category,
        kind="positive" if favourable else "negative",
        pattern=rule.positive_pattern if favourable else rule.negative_pattern,
        detail=rule.detail.format(high=f"{high_r:.1f}", low=f"{low_r:.1f}"),
        high_group_mean=high_r,
        low_group_mean=low_r,
        high_group_size=int(len(high)),
        low_group_size=int(len(low)),
    )


def find_correlations(
    entries: Sequence[HealthEntry],
    cfg: HealthSignalConfig | None = None,
) -> Optional[List[CorrelationInsight]]:
    """
    Insights in rule order, followed by the tracking-consistency note once
    seven entries exist. None below the five-entry floor.
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    p = cfg.correlation
    if len(entries) < p.min_entries:
        log.debug("Correlations need %d entries, got %d", p.min_entries, len(entries))
        return None

    df = entries_frame(entries)
    insights = []
    for rule in p.rules:
        insight = evaluate_rule(df, rule, cfg)
        if insight is not None:
            log.debug("%s insight: %s", rule.category, insight.detail)
            insights.append(insight)

    if len(df) >= p.tracking_min_entries:
        insights.append(CorrelationInsight(
            category="Tracking",
            kind="neutral",
            pattern="Consistency is key",
            detail=f"You've tracked {len(df)} days - every logged day sharpens these patterns",
        ))

    return insights


# ---------------------------------------------------------------------------
# Mental / physical bridge
# ---------------------------------------------------------------------------

def compute_bridge(
    stats: Optional[AggregateStats],
    entries: Sequence[HealthEntry],
    cfg: HealthSignalConfig | None = None,
) -> Optional[BridgeReport]:
    """
    Categorical strength of four mind-body links, read off aggregate averages.

    Averages of unrecorded fields are 0.0 here, same as in the stats table.
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    b = cfg.bridge
    if stats is None or len(entries) < b.min_entries:
        return None

    avg = stats.averages
    stress = avg["stress_level"]
    sleep_q = avg["sleep_quality"]
    mood = avg["mood"]
    activity = avg["activity_minutes"]
    diet = avg["diet_quality"]

    if stress > b.high_stress and sleep_q < b.poor_sleep_quality:
        stress_sleep = 85
    elif stress > b.elevated_stress:
        stress_sleep = 60
    else:
        stress_sleep = 30

    if mood < b.low_mood and activity < b.low_activity_minutes:
        mood_activity = 80
    elif mood < b.subdued_mood:
        mood_activity = 50
    else:
        mood_activity = 25

    if stress > b.severe_stress:
        stability_heart = 70
    elif stress > b.elevated_stress:
        stability_heart = 45
    else:
        stability_heart = 20

    connections = [
        BridgeConnection(
            mental="High Stress",
            physical="Poor Sleep Quality",
            strength=stress_sleep,
            impact="Stress hormones interfere with your sleep cycles",
            recommendation="Try relaxation techniques before bed",
        ),
        BridgeConnection(
            mental="Low Mood",
            physical="Low Energy/Activity",
            strength=mood_activity,
            impact="Mood affects motivation to exercise",
            recommendation="Start with just 10-minute walks",
        ),
        BridgeConnection(
            mental="Mental Fatigue",
            physical="Diet Quality",
            strength=75 if diet < b.poor_diet else 40,
            impact="Poor nutrition affects brain function",
            recommendation="Add more omega-3 rich foods",
        ),
        BridgeConnection(
            mental="Emotional Stability",
            physical="Heart Health",
            strength=stability_heart,
            impact="Chronic stress affects cardiovascular system",
            recommendation="Practice mindfulness daily",
        ),
    ]

    scale = cfg.limits.scale_max
    return BridgeReport(
        connections=connections,
        bridge_score=round_int((scale - stress + mood + sleep_q) / 3 * 10),
    )

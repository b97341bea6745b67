"""
Centralized configuration for all thresholds, gates, windows, and lookup tables.

Every constant the analytics engine depends on lives here. Certainty tiers
and correlation pairs are declarative tables, reproduced as fixed values.
"""

from dataclasses import dataclass, field
from typing import Tuple


# ---------------------------------------------------------------------------
# Tracked fields
# ---------------------------------------------------------------------------

NUMERIC_FIELDS = (
    "sleep_hours",
    "sleep_quality",
    "stress_level",
    "mood",
    "diet_quality",
    "activity_minutes",
    "water_liters",
    "heart_rate",
)

TEN_POINT_FIELDS = ("sleep_quality", "stress_level", "mood", "diet_quality")


# ---------------------------------------------------------------------------
# Entry store boundary
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EntryLimits:
    """How many entries the engine accepts and the valid range of each field."""

    max_entries: int = 30
    scale_min: float = 1.0
    scale_max: float = 10.0


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AggregatorParams:
    """Weekly mood trend windows (offsets into the newest-first list)."""

    min_entries_for_trend: int = 7
    recent_window: Tuple[int, int] = (0, 3)
    older_window: Tuple[int, int] = (4, 7)
    trend_threshold: float = 0.5


# ---------------------------------------------------------------------------
# Confidence estimator
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfidenceWeights:
    """Weights for combining the three confidence components."""

    data_completeness: float = 0.4
    field_completeness: float = 0.4
    consistency: float = 0.2

    def __post_init__(self):
        total = self.data_completeness + self.field_completeness + self.consistency
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Confidence weights must sum to 1.0, got {total}")


@dataclass(frozen=True)
class CertaintyRule:
    """
    Categorical confidence lookup for one analysis aspect.

    `gates` is checked in order; the first (min_count, score, tier) whose
    min_count is met by the number of qualifying values wins. Otherwise the
    fallback score and tier apply.
    """

    aspect: str
    field: str
    gates: Tuple[Tuple[int, int, str], ...]
    fallback_score: int
    fallback_tier: str


DEFAULT_CERTAINTY_RULES: tuple = (
    CertaintyRule(
        aspect="Sleep Pattern Analysis",
        field="sleep_hours",
        gates=((7, 85, "high"), (3, 60, "medium")),
        fallback_score=30,
        fallback_tier="low",
    ),
    CertaintyRule(
        aspect="Stress Trend Detection",
        field="stress_level",
        gates=((7, 80, "high"),),
        fallback_score=45,
        fallback_tier="medium",
    ),
    CertaintyRule(
        aspect="Diet Impact Assessment",
        field="diet_quality",
        gates=((7, 75, "medium"),),
        fallback_score=40,
        fallback_tier="low",
    ),
    CertaintyRule(
        aspect="Activity Correlation",
        field="activity_minutes",
        gates=((7, 78, "high"),),
        fallback_score=35,
        fallback_tier="low",
    ),
)


@dataclass(frozen=True)
class ConfidenceParams:
    """Reference window, completeness fields, and uncertainty thresholds."""

    ideal_entries: int = 14
    completeness_fields: Tuple[str, ...] = (
        "sleep_hours",
        "sleep_quality",
        "stress_level",
        "mood",
        "diet_quality",
        "activity_minutes",
        "water_liters",
    )
    consistency_field: str = "sleep_hours"
    variance_penalty: float = 10.0

    # Uncertainty notes fire strictly below these values
    low_overall: float = 50.0
    low_field_completeness: float = 70.0
    low_consistency: float = 60.0
    min_trend_entries: int = 7

    weights: ConfidenceWeights = field(default_factory=ConfidenceWeights)
    certainty_rules: tuple = DEFAULT_CERTAINTY_RULES


@dataclass(frozen=True)
class TrustParams:
    """Data trust meter: volume against the ideal window, five-field completeness."""

    ideal_entries: int = 14
    fields: Tuple[str, ...] = (
        "sleep_hours",
        "stress_level",
        "diet_quality",
        "mood",
        "activity_minutes",
    )
    volume_weight: float = 0.4
    completeness_weight: float = 0.6

    def __post_init__(self):
        total = self.volume_weight + self.completeness_weight
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Trust weights must sum to 1.0, got {total}")


# ---------------------------------------------------------------------------
# Drift detector
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DriftParams:
    """
    Baseline drift detection.

    The first index after the baseline window acts as the initial anchor; an
    event at index i requires i to be at least `min_gap_entries` past the
    previous anchor.
    """

    min_entries: int = 3
    baseline_entries: int = 3
    window: int = 3
    deviation_threshold: float = 1.0
    min_gap_entries: int = 2

    # Composite score substitutes this for any missing 10-point field
    neutral_default: float = 5.0
    scale_max: float = 10.0

    # Candidate-factor attribution thresholds
    high_factor: float = 6.0
    low_sleep: float = 5.0


# ---------------------------------------------------------------------------
# Pattern correlator
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CorrelationRule:
    """
    One conditional-mean comparison.

    Entries with both fields recorded are split on `condition_field >= threshold`
    into a high and a low group; the mean of `outcome_field` is compared.
    """

    category: str
    condition_field: str
    outcome_field: str
    threshold: float
    positive_pattern: str
    negative_pattern: str
    detail: str
    # +1 when a higher outcome is the desirable direction, -1 otherwise
    desirable: int = 1


DEFAULT_CORRELATION_RULES: tuple = (
    CorrelationRule(
        category="Sleep",
        condition_field="sleep_hours",
        outcome_field="mood",
        threshold=7.0,
        positive_pattern="Better sleep = Better mood for you",
        negative_pattern="Longer sleep is not lifting your mood",
        detail="Your mood averages {high} when sleeping 7+ hours vs {low} with less sleep",
    ),
    CorrelationRule(
        category="Activity",
        condition_field="activity_minutes",
        outcome_field="stress_level",
        threshold=30.0,
        positive_pattern="Exercise reduces your stress",
        negative_pattern="Active days come with higher stress for you",
        detail="Stress is {high} on active days vs {low} on rest days",
        desirable=-1,
    ),
    CorrelationRule(
        category="Diet",
        condition_field="diet_quality",
        outcome_field="sleep_quality",
        threshold=7.0,
        positive_pattern="Good diet improves your sleep",
        negative_pattern="Healthy eating is not improving your sleep",
        detail="Sleep quality is {high} with healthy eating vs {low} otherwise",
    ),
)


@dataclass(frozen=True)
class CorrelationParams:
    """Sample gates and effect threshold for conditional-mean insights."""

    min_entries: int = 5
    min_group_size: int = 3
    min_difference: float = 0.5
    tracking_min_entries: int = 7
    rules: tuple = DEFAULT_CORRELATION_RULES


@dataclass(frozen=True)
class BridgeParams:
    """Mental/physical bridge strength breakpoints (applied to aggregate averages)."""

    min_entries: int = 3
    high_stress: float = 6.0
    elevated_stress: float = 5.0
    severe_stress: float = 7.0
    poor_sleep_quality: float = 6.0
    low_mood: float = 6.0
    subdued_mood: float = 7.0
    low_activity_minutes: float = 30.0
    poor_diet: float = 6.0


# ---------------------------------------------------------------------------
# Emotional calendar
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CalendarParams:
    """Length of the emotional calendar ending at the reference date."""

    days: int = 84


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthSignalConfig:
    """Complete engine configuration. Pass to any component to override defaults."""

    limits: EntryLimits = field(default_factory=EntryLimits)
    aggregator: AggregatorParams = field(default_factory=AggregatorParams)
    confidence: ConfidenceParams = field(default_factory=ConfidenceParams)
    trust: TrustParams = field(default_factory=TrustParams)
    drift: DriftParams = field(default_factory=DriftParams)
    correlation: CorrelationParams = field(default_factory=CorrelationParams)
    bridge: BridgeParams = field(default_factory=BridgeParams)
    calendar: CalendarParams = field(default_factory=CalendarParams)

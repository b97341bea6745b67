"""
Value types flowing into and out of the engine.

`HealthEntry` is the only input shape. Everything else is derived, recomputed
on each call, and never mutated after construction.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from healthsignal.signals import round_half_up


@dataclass(frozen=True)
class HealthEntry:
    """One day of observations. Any numeric field may be absent (None)."""

    date: date
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[float] = None
    stress_level: Optional[float] = None
    mood: Optional[float] = None
    diet_quality: Optional[float] = None
    activity_minutes: Optional[float] = None
    water_liters: Optional[float] = None
    heart_rate: Optional[float] = None


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AggregateStats:
    """
    Per-field averages over the supplied entries.

    An average of 0.0 is ambiguous on its own; `field_counts` says how many
    entries actually recorded each field.
    """

    averages: Dict[str, float]
    field_counts: Dict[str, int]
    total_entries: int
    latest_entry: HealthEntry
    weekly_trend: str

    def average(self, name: str) -> Optional[float]:
        """Average for `name`, or None when no entry recorded it."""
        if self.field_counts.get(name, 0) == 0:
            return None
        return self.averages[name]


# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Certainty:
    aspect: str
    confidence: int
    tier: str


@dataclass(frozen=True)
class ConfidenceReport:
    overall: int
    data_completeness: int
    field_completeness: int
    consistency: int
    certainties: List[Certainty] = field(default_factory=list)
    uncertainties: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DataTrust:
    overall: int
    volume: int
    completeness: int
    data_points: int


# ---------------------------------------------------------------------------
# Drift
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DriftEvent:
    date: date
    direction: str
    magnitude: float
    composite_score_at_point: float
    candidate_factors: Tuple[str, ...]


@dataclass(frozen=True)
class DriftReport:
    baseline: float
    current_score: float
    trend: str
    days_since_start: int
    events: List[DriftEvent] = field(default_factory=list)
    timeline: List[Tuple[date, float]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Correlations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CorrelationInsight:
    category: str
    kind: str
    pattern: str
    detail: str
    high_group_mean: Optional[float] = None
    low_group_mean: Optional[float] = None
    high_group_size: int = 0
    low_group_size: int = 0

    @property
    def delta(self) -> Optional[float]:
        if self.high_group_mean is None or self.low_group_mean is None:
            return None
        return round_half_up(self.high_group_mean - self.low_group_mean, 1)


@dataclass(frozen=True)
class BridgeConnection:
    mental: str
    physical: str
    strength: int
    impact: str
    recommendation: str


@dataclass(frozen=True)
class BridgeReport:
    connections: List[BridgeConnection]
    bridge_score: int


# ---------------------------------------------------------------------------
# Emotional calendar
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CalendarCell:
    date: date
    week: int
    weekday: int
    stress_level: Optional[float]
    mood: Optional[float]
    emotional_score: Optional[int]


@dataclass(frozen=True)
class EmotionalCalendar:
    cells: List[CalendarCell]
    average_score: Optional[int]
    logged_days: int

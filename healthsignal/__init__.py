"""
Health Signal — analytics engine for daily health logs.

Turns a bounded, ordered history of daily entries (sleep, stress, mood,
diet, activity, hydration) into aggregate statistics, confidence scores,
baseline drift events, and simple behavioral correlations.

Architecture:
    config      — All thresholds, gates, and lookup tables (single source of truth)
    entries     — Entry store boundary: validation, ordering, DataFrame projection
    scoring     — Per-entry composite and emotional scores
    signals     — Rounding, window means, variance, delta classification
    aggregator  — Field averages and weekly trend
    confidence  — Confidence report and data trust meter
    drift       — Baseline drift detection
    correlator  — Conditional-mean insights and the mental/physical bridge
    heatmap     — Emotional calendar ending at an explicit reference date
    pipeline    — Orchestration: load → validate → analyze → report

Every component is a pure function of the entry list; none keeps state
between calls.
"""

from healthsignal.aggregator import compute_aggregate_stats
from healthsignal.confidence import compute_confidence, compute_data_trust
from healthsignal.correlator import compute_bridge, find_correlations
from healthsignal.drift import detect_drift
from healthsignal.entries import load_entries, prepare_entries
from healthsignal.heatmap import compute_emotional_calendar
from healthsignal.models import HealthEntry
from healthsignal.pipeline import analyze, analyze_data, as_dict, generate_report

__version__ = "1.0.0"

__all__ = [
    "HealthEntry",
    "analyze",
    "analyze_data",
    "as_dict",
    "compute_aggregate_stats",
    "compute_bridge",
    "compute_confidence",
    "compute_data_trust",
    "compute_emotional_calendar",
    "detect_drift",
    "find_correlations",
    "generate_report",
    "load_entries",
    "prepare_entries",
]

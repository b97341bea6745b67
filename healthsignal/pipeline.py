"""
Pipeline orchestration: load → validate → aggregate / confidence / drift / correlate → report.

File reading is delegated to `entries.load_entries`; this module owns
orchestration and report formatting. All analytical logic is delegated to the component modules, which never
depend on one another except through the aggregate stats handed to the
mental/physical bridge.
"""

import dataclasses
import logging
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from healthsignal.aggregator import compute_aggregate_stats
from healthsignal.config import HealthSignalConfig
from healthsignal.confidence import compute_confidence, compute_data_trust
from healthsignal.correlator import compute_bridge, find_correlations
from healthsignal.drift import detect_drift
from healthsignal.entries import load_entries, prepare_entries
from healthsignal.heatmap import compute_emotional_calendar

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Core analysis (pure function, no file I/O)
# ---------------------------------------------------------------------------

def _analyze_entries(entries, as_of: Optional[date], cfg: HealthSignalConfig) -> Dict:
    """
    Run every component over an already validated, newest-first history.

    Stateless. Each value is either a populated result or None.
    """
    if as_of is None and entries:
        as_of = entries[0].date

    stats = compute_aggregate_stats(entries, cfg)

    result = {
        "total_entries": len(entries),
        "as_of": as_of,
        "stats": stats,
        "confidence": compute_confidence(entries, cfg),
        "trust": compute_data_trust(entries, cfg),
        "drift": detect_drift(entries, cfg),
        "correlations": find_correlations(entries, cfg),
        "bridge": compute_bridge(stats, entries, cfg),
        "calendar": compute_emotional_calendar(entries, as_of, cfg) if as_of else None,
    }

    missing = [key for key, value in result.items() if value is None]
    if missing:
        log.debug("Insufficient data for: %s", ", ".join(missing))
    return result


# ---------------------------------------------------------------------------
# Public Entry Points
# ---------------------------------------------------------------------------

def analyze(
    filepath: Union[str, Path],
    as_of: Optional[date] = None,
    cfg: HealthSignalConfig | None = None,
) -> Dict:
    """
    CLI-compatible entry point.
    Reads a JSON list of daily entries and runs analysis.
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    entries = load_entries(filepath, cfg)
    return _analyze_entries(entries, as_of, cfg)


def analyze_data(
    records: Iterable[dict],
    as_of: Optional[date] = None,
    cfg: HealthSignalConfig | None = None,
) -> Dict:
    """
    Backend / UI integration entry point.

    Accepts raw records (or HealthEntry values) directly; `as_of` defaults
    to the newest entry's date, never the wall clock.
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    entries = prepare_entries(records, cfg)
    return _analyze_entries(entries, as_of, cfg)


def as_dict(result: Dict) -> Dict:
    """JSON-ready copy of an analysis result (dates as ISO strings)."""

    def convert(value):
        if dataclasses.is_dataclass(value):
            return convert(dataclasses.asdict(value))
        if isinstance(value, dict):
            return {key: convert(v) for key, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [convert(v) for v in value]
        if isinstance(value, date):
            return value.isoformat()
        return value

    return convert(result)


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------

_AVERAGE_LABELS = (
    ("sleep_hours", "Sleep (hours)"),
    ("sleep_quality", "Sleep Quality"),
    ("stress_level", "Stress Level"),
    ("mood", "Mood"),
    ("diet_quality", "Diet Quality"),
    ("activity_minutes", "Activity (min)"),
    ("water_liters", "Water (liters)"),
    ("heart_rate", "Heart Rate"),
)


def generate_report(result: Dict) -> str:
    """Format the analysis result as a human-readable text report."""
    lines = [
        "HEALTH SIGNAL REPORT",
        "=" * 58,
        "",
        f"  Entries analyzed    : {result['total_entries']}",
    ]

    stats = result["stats"]
    if stats is None:
        lines.append("  Averages            : log more data to see averages")
    else:
        lines.append(f"  Latest entry        : {stats.latest_entry.date.isoformat()}")
        lines.append(f"  Weekly Trend        : {stats.weekly_trend}")
        lines.append("")
        lines.append("  Averages:")
        for name, label in _AVERAGE_LABELS:
            value = stats.average(name)
            shown = "n/a" if value is None else f"{value:.1f} ({stats.field_counts[name]} days)"
            lines.append(f"    {label:17s} : {shown}")

    lines.append("")
    conf = result["confidence"]
    if conf is None:
        lines.append("  Confidence          : log more data to see confidence")
    else:
        lines.append(
            f"  Confidence          : {conf.overall}% "
            f"(data {conf.data_completeness}%, fields {conf.field_completeness}%, "
            f"consistency {conf.consistency}%)"
        )
        for c in conf.certainties:
            lines.append(f"    {c.aspect:25s} : {c.confidence}% ({c.tier})")
        for note in conf.uncertainties:
            lines.append(f"    ! {note}")

    trust = result["trust"]
    if trust is not None:
        lines.append(
            f"  Data Trust          : {trust.overall}% "
            f"(volume {trust.volume}%, completeness {trust.completeness}%)"
        )

    lines.append("")
    drift = result["drift"]
    if drift is None:
        lines.append("  Drift               : need at least 3 entries to analyze drift")
    else:
        lines.append(
            f"  Drift               : baseline {drift.baseline:.1f}, current "
            f"{drift.current_score:.1f} ({drift.trend}, {drift.days_since_start}d span)"
        )
        for event in drift.events:
            factors = ", ".join(event.candidate_factors)
            lines.append(
                f"    {event.date.isoformat()} {event.direction:11s} "
                f"{event.magnitude:.1f} pts  [{factors}]"
            )

    lines.append("")
    insights = result["correlations"]
    if insights is None:
        lines.append("  Patterns            : need at least 5 entries to find patterns")
    elif not insights:
        lines.append("  Patterns            : no clear patterns yet")
    else:
        lines.append("  Patterns:")
        for insight in insights:
            lines.append(f"    - [{insight.category}] {insight.pattern}: {insight.detail}")

    bridge = result["bridge"]
    if bridge is not None:
        lines.append("")
        lines.append(f"  Mind-Body Bridge    : {bridge.bridge_score}")
        for conn in bridge.connections:
            lines.append(f"    {conn.mental} -> {conn.physical}: {conn.strength}%")

    calendar = result["calendar"]
    if calendar is not None and calendar.average_score is not None:
        lines.append("")
        lines.append(
            f"  Emotional Score     : {calendar.average_score} "
            f"({calendar.logged_days} logged days)"
        )

    lines.append("")
    lines.append("=" * 58)
    return "\n".join(lines)

"""
Entry store boundary: validation, ordering, capping, and DataFrame projection.

This is where raw records (JSON objects, database rows) become `HealthEntry`
values. The analysis modules trust what comes out of here and never
re-validate.
"""

import json
import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from healthsignal.config import HealthSignalConfig, NUMERIC_FIELDS, TEN_POINT_FIELDS
from healthsignal.models import HealthEntry

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field aliases (column names used by the logging app's storage)
# ---------------------------------------------------------------------------

FIELD_ALIASES = {
    "entry_date": "date",
    "physical_activity_minutes": "activity_minutes",
    "water_intake_liters": "water_liters",
    "sleepHours": "sleep_hours",
    "sleepQuality": "sleep_quality",
    "stressLevel": "stress_level",
    "dietQuality": "diet_quality",
    "activityMinutes": "activity_minutes",
    "waterLiters": "water_liters",
    "heartRate": "heart_rate",
}

NON_NEGATIVE_FIELDS = ("sleep_hours", "activity_minutes", "water_liters")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_date(raw) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str) and raw:
        try:
            return datetime.fromisoformat(raw[:10]).date()
        except ValueError:
            pass
    raise ValueError(f"Invalid entry date: {raw!r}")


def _parse_value(name: str, raw, cfg: HealthSignalConfig) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"{name} must be numeric, got {raw!r}")
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be numeric, got {raw!r}") from None
    if math.isnan(value):
        return None
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {raw!r}")

    lim = cfg.limits
    if name in TEN_POINT_FIELDS and not lim.scale_min <= value <= lim.scale_max:
        raise ValueError(
            f"{name} must be within [{lim.scale_min:g}, {lim.scale_max:g}], got {value:g}"
        )
    if name in NON_NEGATIVE_FIELDS and value < 0:
        raise ValueError(f"{name} must be >= 0, got {value:g}")
    if name == "heart_rate" and value <= 0:
        raise ValueError(f"heart_rate must be positive, got {value:g}")
    return value


def parse_entry(record: Dict, cfg: HealthSignalConfig | None = None) -> HealthEntry:
    """Build a validated HealthEntry from one raw record. Unknown keys are ignored."""
    if cfg is None:
        cfg = HealthSignalConfig()

    normalized = {FIELD_ALIASES.get(key, key): value for key, value in record.items()}

    if "date" not in normalized:
        raise ValueError("Entry is missing its date")

    values = {
        name: _parse_value(name, normalized.get(name), cfg)
        for name in NUMERIC_FIELDS
    }
    return HealthEntry(date=_parse_date(normalized["date"]), **values)


def prepare_entries(
    records: Iterable[Union[Dict, HealthEntry]],
    cfg: HealthSignalConfig | None = None,
) -> List[HealthEntry]:
    """
    Validate records and return them newest-first, capped to the most recent
    `cfg.limits.max_entries`.

    Raises ValueError on malformed values or on two records for the same date.
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    entries = [
        r if isinstance(r, HealthEntry) else parse_entry(r, cfg)
        for r in records
    ]

    seen = set()
    for entry in entries:
        if entry.date in seen:
            raise ValueError(f"Duplicate entry for {entry.date.isoformat()}")
        seen.add(entry.date)

    entries.sort(key=lambda e: e.date, reverse=True)

    cap = cfg.limits.max_entries
    if len(entries) > cap:
        log.info("Keeping the %d most recent of %d entries", cap, len(entries))
        entries = entries[:cap]
    return entries


def load_entries(
    filepath: Union[str, Path],
    cfg: HealthSignalConfig | None = None,
) -> List[HealthEntry]:
    """Load and validate daily entries from a JSON file holding a list of records."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError("Data file must contain a list of entries")

    return prepare_entries(data, cfg)


# ---------------------------------------------------------------------------
# DataFrame projection
# ---------------------------------------------------------------------------

def entries_frame(entries: Sequence[HealthEntry], ascending: bool = False) -> pd.DataFrame:
    """
    One row per entry, one float column per tracked field, NaN for absent values.

    Rows are ordered by date (newest first unless `ascending`) with a fresh
    RangeIndex, so positional offsets line up with the trend windows.
    """
    columns = ["date"] + list(NUMERIC_FIELDS)
    if not entries:
        return pd.DataFrame(columns=columns)

    rows = [
        {"date": e.date, **{name: getattr(e, name) for name in NUMERIC_FIELDS}}
        for e in entries
    ]
    df = pd.DataFrame(rows, columns=columns)
    for name in NUMERIC_FIELDS:
        df[name] = pd.to_numeric(df[name], errors="coerce").astype(np.float64)

    df.sort_values("date", ascending=ascending, inplace=True, kind="mergesort")
    df.reset_index(drop=True, inplace=True)
    return df

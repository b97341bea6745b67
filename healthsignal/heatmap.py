"""
Emotional calendar: stress/mood cells for the days leading up to a reference date.

The reference date is always passed in; nothing here reads the clock.
Days without a logged entry stay empty.
"""

from datetime import date, timedelta
from typing import Sequence

import numpy as np

from healthsignal.config import HealthSignalConfig
from healthsignal.entries import entries_frame
from healthsignal.models import CalendarCell, EmotionalCalendar, HealthEntry
from healthsignal.scoring import compute_emotional_scores
from healthsignal.signals import round_int


def _optional(value):
    return None if value is None or np.isnan(value) else float(value)


def compute_emotional_calendar(
    entries: Sequence[HealthEntry],
    as_of: date,
    cfg: HealthSignalConfig | None = None,
) -> EmotionalCalendar:
    """
    One cell per day for `cfg.calendar.days` days ending at `as_of`.

    `week` counts from the oldest day shown; `weekday` follows
    date.weekday() (Monday = 0).
    """
    if cfg is None:
        cfg = HealthSignalConfig()

    span = cfg.calendar.days
    df = compute_emotional_scores(entries_frame(entries), cfg)
    by_date = {row["date"]: row for _, row in df.iterrows()}

    cells = []
    for offset in range(span):
        day = as_of - timedelta(days=span - 1 - offset)
        row = by_date.get(day)
        if row is None:
            stress = mood = score = None
        else:
            stress = _optional(row["stress_level"])
            mood = _optional(row["mood"])
            raw = _optional(row["emotional_score"])
            score = None if raw is None else round_int(raw)
        cells.append(CalendarCell(
            date=day,
            week=offset // 7,
            weekday=day.weekday(),
            stress_level=stress,
            mood=mood,
            emotional_score=score,
        ))

    scored = [c.emotional_score for c in cells if c.emotional_score is not None]
    return EmotionalCalendar(
        cells=cells,
        average_score=round_int(sum(scored) / len(scored)) if scored else None,
        logged_days=sum(1 for c in cells if c.date in by_date),
    )

"""
Pattern Service
===============
Time-of-day and weekday mood averages, trend direction, and the small
descriptive helpers the insights screen uses.

All functions take the entry list explicitly and return plain dicts/lists.
Buckets without entries are absent from the result, never zero-filled, so
callers can tell "no data" apart from "average of 0".
"""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from moodjournal.calendar_context import CalendarContext
from moodjournal.models.mood import MoodEntry, MoodType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_TREND_ENTRIES = 3
TREND_WINDOW = 7
TREND_EDGE = 3
TREND_THRESHOLD = 0.5
DEFAULT_AVERAGE_MOOD = 3.0


class MoodTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


# ---------------------------------------------------------------------------
# Bucketed averages
# ---------------------------------------------------------------------------


def _bucket_means(buckets: list[str], values: list[float]) -> dict[str, float]:
    df = pd.DataFrame({"bucket": buckets, "mood_value": values})
    means = df.groupby("bucket", sort=False)["mood_value"].mean()
    return {str(bucket): float(avg) for bucket, avg in means.items()}


def time_patterns(entries: Sequence[MoodEntry], calendar: CalendarContext) -> dict[str, float]:
    """Average mood per time of day (morning/afternoon/evening/night)."""
    if not entries:
        return {}
    return _bucket_means(
        [calendar.time_of_day(e.date).value for e in entries],
        [e.mood_value for e in entries],
    )


def weekly_patterns(entries: Sequence[MoodEntry], calendar: CalendarContext) -> dict[str, float]:
    """Average mood per weekday name (local calendar)."""
    if not entries:
        return {}
    return _bucket_means(
        [calendar.weekday_name(e.date) for e in entries],
        [e.mood_value for e in entries],
    )


def best_time_of_day(patterns: dict[str, float]) -> Optional[str]:
    if not patterns:
        return None
    return max(patterns, key=patterns.__getitem__)


def best_days_of_week(patterns: dict[str, float], top: int = 3) -> list[str]:
    return sorted(patterns, key=patterns.__getitem__, reverse=True)[:top]


# ---------------------------------------------------------------------------
# Trend
# ---------------------------------------------------------------------------


def trend(entries: Sequence[MoodEntry], calendar: CalendarContext | None = None) -> MoodTrend:
    """Compare the start and end of the most recent window of entries.

    The window is the latest ``min(7, n)`` entries in chronological order;
    the mean of its last three is compared with the mean of its first three.
    With exactly three entries both halves are the same three entries, so the
    result is always ``stable``.
    """
    if len(entries) < MIN_TREND_ENTRIES:
        return MoodTrend.STABLE

    if calendar is not None:
        ordered = sorted(entries, key=lambda e: calendar.localize(e.date))
    else:
        ordered = sorted(entries, key=lambda e: e.date)
    window = [e.mood_value for e in ordered[-min(TREND_WINDOW, len(ordered)):]]

    start_mood = float(np.mean(window[:TREND_EDGE]))
    end_mood = float(np.mean(window[-TREND_EDGE:]))
    difference = end_mood - start_mood

    if difference > TREND_THRESHOLD:
        return MoodTrend.IMPROVING
    if difference < -TREND_THRESHOLD:
        return MoodTrend.DECLINING
    return MoodTrend.STABLE


# ---------------------------------------------------------------------------
# Descriptive helpers
# ---------------------------------------------------------------------------


def average_mood_score(entries: Sequence[MoodEntry]) -> float:
    """Mean mood value; 3.0 when there are no entries."""
    if not entries:
        return DEFAULT_AVERAGE_MOOD
    return float(np.mean([e.mood_value for e in entries]))


def mood_variance(values: Sequence[float]) -> float:
    """Sample variance (n - 1). Zero for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.var(values, ddof=1))


def mood_distribution(entries: Sequence[MoodEntry]) -> dict[MoodType, int]:
    """Count of entries per mood, every mood present."""
    counts = Counter(e.mood for e in entries)
    return {mood: counts.get(mood, 0) for mood in MoodType}


def most_active_day(entries: Sequence[MoodEntry], calendar: CalendarContext) -> Optional[str]:
    """Weekday with the most entries."""
    if not entries:
        return None
    counts = Counter(calendar.weekday_name(e.date) for e in entries)
    return counts.most_common(1)[0][0]

"""
Correlation Service
===================
Answers two questions for the insights screen:

1. "Do I feel better or worse on days tagged *exercise* / *family* / ...?"
   Per-tag mean mood compared with the overall mean (``impact``), bucketed
   into weak / moderate / strong by impact size and how often the tag occurs.

2. "Does my mood follow my sleep / steps / heart rate?"
   Pearson correlation between a daily health signal and the mood of each
   entry recorded on that calendar day.

Both are best-effort: not enough samples means the tag or signal is simply
left out of the result. Nothing here raises on thin data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Mapping, Optional, Sequence

import numpy as np
import pandas as pd
from scipy.stats import pearsonr

from moodjournal.calendar_context import CalendarContext
from moodjournal.models.health import DailyHealthSignal
from moodjournal.models.mood import MoodEntry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_TAG_OCCURRENCES = 3
MIN_HEALTH_PAIRS = 3

STRONG_IMPACT = 1.0
STRONG_FREQUENCY = 5
MODERATE_IMPACT = 0.5
MODERATE_FREQUENCY = 3

# result key -> DailyHealthSignal attribute
HEALTH_SIGNALS: dict[str, str] = {
    "sleep": "sleep_hours",
    "activity": "step_count",
    "heart_rate": "average_heart_rate",
}


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

class CorrelationStrength(str, Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


@dataclass
class MoodCorrelation:
    impact: float  # positive = tag days are better than average
    strength: CorrelationStrength
    frequency: int


@dataclass
class HealthCorrelation:
    signal: str
    coefficient: float
    p_value: float
    sample_size: int

    @property
    def direction(self) -> str:
        if self.coefficient > 0:
            return "positive"
        if self.coefficient < 0:
            return "negative"
        return "neutral"


# ---------------------------------------------------------------------------
# Category tags
# ---------------------------------------------------------------------------


def determine_strength(impact: float, frequency: int) -> CorrelationStrength:
    if abs(impact) > STRONG_IMPACT and frequency > STRONG_FREQUENCY:
        return CorrelationStrength.STRONG
    if abs(impact) > MODERATE_IMPACT and frequency > MODERATE_FREQUENCY:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.WEAK


def category_correlations(entries: Sequence[MoodEntry]) -> dict[str, MoodCorrelation]:
    """Mood impact of every tag option seen at least three times."""
    rows = [
        {"tag": option, "mood_value": entry.mood_value}
        for entry in entries
        for option in entry.tag_options()
    ]
    if not rows:
        return {}

    overall_average = float(np.mean([e.mood_value for e in entries]))

    tag_df = pd.DataFrame(rows)
    per_tag = tag_df.groupby("tag", sort=False)["mood_value"].agg(["mean", "count"])

    correlations: dict[str, MoodCorrelation] = {}
    for tag, stats in per_tag.iterrows():
        frequency = int(stats["count"])
        if frequency < MIN_TAG_OCCURRENCES:
            logger.debug("Skipping tag %r, only %d occurrences", tag, frequency)
            continue

        impact = float(stats["mean"]) - overall_average
        correlations[str(tag)] = MoodCorrelation(
            impact=impact,
            strength=determine_strength(impact, frequency),
            frequency=frequency,
        )

    return correlations


# ---------------------------------------------------------------------------
# Health signals
# ---------------------------------------------------------------------------


def _has_variance(values: np.ndarray) -> bool:
    return bool(np.ptp(values) > 0)


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson r of *x* and *y*; 0.0 when undefined (length mismatch, n < 2,
    or zero variance in either sequence)."""
    if len(x) != len(y) or len(x) < 2:
        return 0.0

    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)

    # Guard: constant input makes the denominator zero
    if not _has_variance(xs) or not _has_variance(ys):
        return 0.0

    r, _ = pearsonr(xs, ys)
    return float(r)


def health_correlations(
    entries: Sequence[MoodEntry],
    signals: Optional[Mapping[date, DailyHealthSignal]],
    calendar: CalendarContext,
) -> dict[str, HealthCorrelation]:
    """Correlate each health signal with mood.

    One sample per entry whose calendar day has a signal with a positive
    value for that metric. Signals with fewer than three samples are omitted.
    Returns ``{}`` when no health data is available at all.
    """
    if not signals or not entries:
        return {}

    rows = []
    for entry in entries:
        signal = signals.get(calendar.day_of(entry.date))
        if signal is None:
            continue
        row = {key: float(getattr(signal, attr)) for key, attr in HEALTH_SIGNALS.items()}
        row["mood_value"] = entry.mood_value
        rows.append(row)

    if not rows:
        return {}

    paired = pd.DataFrame(rows)
    results: dict[str, HealthCorrelation] = {}

    for key in HEALTH_SIGNALS:
        samples = paired.loc[paired[key] > 0, [key, "mood_value"]]
        sample_size = len(samples)
        if sample_size < MIN_HEALTH_PAIRS:
            logger.debug("Skipping %s correlation, only %d paired days", key, sample_size)
            continue

        xs = samples[key].to_numpy()
        ys = samples["mood_value"].to_numpy()

        if _has_variance(xs) and _has_variance(ys):
            r, p = pearsonr(xs, ys)
            coefficient, p_value = float(r), float(p)
        else:
            coefficient, p_value = 0.0, 1.0

        results[key] = HealthCorrelation(
            signal=key,
            coefficient=coefficient,
            p_value=p_value,
            sample_size=sample_size,
        )

    return results

"""
Prediction Service
==================
Rule-based "how will I probably feel?" estimate. There is no model here:
the score is an average of the user's own bucketed history nudged by the
recent trend, and confidence is an additive rule.

Score:
    hourly  = average for the time-of-day bucket of ``at`` (else overall)
    weekly  = average for the weekday of ``at`` (else overall)
    trend   = mean of the 3 newest entries - overall mean
    score   = clamp((hourly + weekly) / 2 + 0.5 * trend, 1.0, 6.0)

Confidence:
    0.50 base
    +0.20 more than 5 entries in total
    +0.15 a personality profile exists
    +0.10 at least 3 entries in the 7 days before ``at``
    capped at 1.0

The result also carries the season and workday flag of ``at`` so the app can
phrase the estimate ("a winter Monday").
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Sequence

import numpy as np

from moodjournal.calendar_context import CalendarContext, Season
from moodjournal.models.mood import MainMoodCategory, MoodEntry, MoodType
from moodjournal.models.personality import UserPersonality
from moodjournal.services.patterns import time_patterns, weekly_patterns

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BASE_CONFIDENCE = 0.5
HISTORY_BONUS = 0.2
HISTORY_THRESHOLD = 5
PROFILE_BONUS = 0.15
RECENT_BONUS = 0.1
RECENT_MIN_ENTRIES = 3
RECENT_WINDOW = timedelta(days=7)

TREND_ENTRIES = 3
TREND_WEIGHT = 0.5
TREND_REASON_THRESHOLD = 0.5
MAX_SUGGESTED_CATEGORIES = 4


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class PredictionPatterns:
    hourly_average: float
    weekly_average: float
    recent_trend: float
    common_categories: list[str]
    total_entries: int


@dataclass
class MoodPrediction:
    predicted_mood: MoodType
    confidence: float
    score: float
    reasons: list[str] = field(default_factory=list)
    suggested_categories: list[str] = field(default_factory=list)
    time_of_prediction: Optional[datetime] = None
    season: Optional[Season] = None
    is_workday: Optional[bool] = None

    @property
    def confidence_text(self) -> str:
        return f"{int(self.confidence * 100)}% sure"

    @property
    def main_reason(self) -> str:
        return self.reasons[0] if self.reasons else "Based on your previous entries"


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def prediction_confidence(
    total_entries: int,
    has_profile: bool,
    recent_entries: int,
) -> float:
    confidence = BASE_CONFIDENCE
    if total_entries > HISTORY_THRESHOLD:
        confidence += HISTORY_BONUS
    if has_profile:
        confidence += PROFILE_BONUS
    if recent_entries >= RECENT_MIN_ENTRIES:
        confidence += RECENT_BONUS
    return min(confidence, 1.0)


def _newest_first(entries: Sequence[MoodEntry], calendar: CalendarContext) -> list[MoodEntry]:
    return sorted(entries, key=lambda e: calendar.localize(e.date), reverse=True)


def _common_positive_categories(entries: Sequence[MoodEntry]) -> list[str]:
    counts = Counter(
        option
        for entry in entries
        if entry.mood.main_category is MainMoodCategory.POSITIVE
        for option in entry.tag_options()
    )
    return [option for option, _ in counts.most_common(MAX_SUGGESTED_CATEGORIES)]


def build_patterns(
    entries: Sequence[MoodEntry],
    calendar: CalendarContext,
    at: datetime,
) -> PredictionPatterns:
    overall = float(np.mean([e.mood_value for e in entries]))

    hourly = time_patterns(entries, calendar).get(calendar.time_of_day(at).value, overall)
    weekly = weekly_patterns(entries, calendar).get(calendar.weekday_name(at), overall)

    newest = _newest_first(entries, calendar)[:TREND_ENTRIES]
    recent_trend = float(np.mean([e.mood_value for e in newest])) - overall

    return PredictionPatterns(
        hourly_average=hourly,
        weekly_average=weekly,
        recent_trend=recent_trend,
        common_categories=_common_positive_categories(entries),
        total_entries=len(entries),
    )


def _reasons(patterns: PredictionPatterns, calendar: CalendarContext, at: datetime) -> list[str]:
    bucket = calendar.time_of_day(at).value
    day = calendar.weekday_name(at)
    reasons = [
        f"You usually feel {MoodType.from_value(patterns.hourly_average).value} "
        f"in the {bucket}",
        f"Your {day}s tend to be {MoodType.from_value(patterns.weekly_average).value}",
    ]
    if patterns.recent_trend > TREND_REASON_THRESHOLD:
        reasons.append("Your mood has been lifting over your last few entries")
    elif patterns.recent_trend < -TREND_REASON_THRESHOLD:
        reasons.append("Your last few entries have been harder than usual")
    return reasons


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def predict(
    entries: Sequence[MoodEntry],
    calendar: CalendarContext,
    at: datetime,
    personality: Optional[UserPersonality] = None,
) -> Optional[MoodPrediction]:
    """Predict the mood for *at*. ``None`` when there is no history at all."""
    if not entries:
        logger.debug("No entries, skipping prediction")
        return None

    patterns = build_patterns(entries, calendar, at)

    raw_score = (
        (patterns.hourly_average + patterns.weekly_average) / 2
        + TREND_WEIGHT * patterns.recent_trend
    )
    score = min(max(raw_score, 1.0), 6.0)

    local_at = calendar.localize(at)
    recent_count = sum(
        1
        for e in entries
        if local_at - RECENT_WINDOW <= calendar.localize(e.date) <= local_at
    )

    return MoodPrediction(
        predicted_mood=MoodType.from_value(score),
        confidence=prediction_confidence(
            total_entries=len(entries),
            has_profile=personality is not None,
            recent_entries=recent_count,
        ),
        score=score,
        reasons=_reasons(patterns, calendar, at),
        suggested_categories=patterns.common_categories,
        time_of_prediction=at,
        season=calendar.season(at),
        is_workday=calendar.is_workday(at),
    )

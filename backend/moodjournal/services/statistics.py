"""
Statistics Service
==================
Weekly summary card, good-day streak, most common journal words, and the
short summary insight shown on the home screen.

Note on "positive": ``positive_percentage`` and ``streak`` both count only
the ``good`` mood, not the whole positive group (amazing/good/okay). This
matches what the app has always shown and is pinned by tests.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence

from moodjournal.calendar_context import CalendarContext
from moodjournal.models.mood import MoodEntry, MoodType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_ENTRIES_FOR_WEEKLY_STATS = 5
MIN_WORD_LENGTH = 4  # tokens of 3 characters or fewer are dropped
COMMON_WORDS_LIMIT = 10
SUMMARY_WINDOW = 7
SUMMARY_CONFIDENCE = 0.8


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class WeeklyStats:
    total_entries: int
    positive_percentage: float
    streak: int


class InsightType(str, Enum):
    MOOD_IMPROVING = "mood_improving"
    MOOD_STABLE = "mood_stable"


@dataclass
class MoodInsight:
    type: InsightType
    title: str
    message: str
    tips: list[str] = field(default_factory=list)
    confidence: float = SUMMARY_CONFIDENCE
    generated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Weekly stats
# ---------------------------------------------------------------------------


def current_streak(entries: Sequence[MoodEntry], calendar: CalendarContext) -> int:
    """Consecutive ``good`` entries counting back from the newest."""
    streak = 0
    for entry in sorted(entries, key=lambda e: calendar.localize(e.date), reverse=True):
        if entry.mood != MoodType.GOOD:
            break
        streak += 1
    return streak


def weekly_stats(
    entries: Sequence[MoodEntry],
    calendar: CalendarContext,
    now: datetime,
) -> Optional[WeeklyStats]:
    """Summary of the current calendar week, or None with fewer than 5 entries overall."""
    if len(entries) < MIN_ENTRIES_FOR_WEEKLY_STATS:
        logger.debug("Weekly stats need %d entries, have %d",
                     MIN_ENTRIES_FOR_WEEKLY_STATS, len(entries))
        return None

    this_week = [e for e in entries if calendar.is_in_same_week(e.date, now)]
    good_days = sum(1 for e in this_week if e.mood == MoodType.GOOD)
    total = len(this_week)

    return WeeklyStats(
        total_entries=total,
        positive_percentage=good_days / total * 100 if total > 0 else 0.0,
        streak=current_streak(entries, calendar),
    )


# ---------------------------------------------------------------------------
# Words
# ---------------------------------------------------------------------------


def common_words(entries: Sequence[MoodEntry], limit: int = COMMON_WORDS_LIMIT) -> list[str]:
    """Most frequent words (length > 3) across every entry's display text.

    Ties keep first-seen order.
    """
    text = " ".join(e.display_text for e in entries).lower()
    words = [w for w in text.split() if len(w) >= MIN_WORD_LENGTH]
    return [word for word, _ in Counter(words).most_common(limit)]


# ---------------------------------------------------------------------------
# Summary insight
# ---------------------------------------------------------------------------


def summary_insight(entries: Sequence[MoodEntry], now: datetime) -> Optional[MoodInsight]:
    """Share of good days among the latest seven entries (collection order)."""
    if not entries:
        return None

    recent = list(entries[:SUMMARY_WINDOW])
    good_days = sum(1 for e in recent if e.mood == MoodType.GOOD)
    percentage = int(good_days / len(recent) * 100)

    return MoodInsight(
        type=InsightType.MOOD_IMPROVING if percentage > 50 else InsightType.MOOD_STABLE,
        title="Weekly Summary",
        message=f"{percentage}% of your recent days were good days.",
        tips=["Keep doing what works for you!"],
        confidence=SUMMARY_CONFIDENCE,
        generated_at=now,
    )

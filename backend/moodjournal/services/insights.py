"""
Journal Insights
================
One place the presentation layer asks for derived views of the journal.

Weekly stats and common words are cached and dropped whenever the entry
store reports a change (save, delete, reset, reload, failed write), so the
next read recomputes from the full in-memory collection. Weekly stats are
also recomputed once the clock moves into a new calendar week. Everything
else is cheap enough to compute on each call.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from moodjournal.calendar_context import CalendarContext
from moodjournal.models.mood import MoodType
from moodjournal.services import correlation, patterns, prediction, statistics
from moodjournal.services.entry_store import EntryStore, StoreChange, get_entry_store
from moodjournal.services.health_signals import HealthSignalRegistry, get_health_registry
from moodjournal.services.personality import ProfileStore, get_profile_store

logger = logging.getLogger(__name__)


class JournalInsights:
    def __init__(
        self,
        store: EntryStore,
        health: HealthSignalRegistry,
        profiles: ProfileStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._health = health
        self._profiles = profiles
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        # (week start, stats) so a new calendar week recomputes without a store change
        self._weekly_stats: Optional[tuple[datetime, Optional[statistics.WeeklyStats]]] = None
        self._common_words: Optional[list[str]] = None
        self._unsubscribe = store.subscribe(self._on_store_change)

    @property
    def calendar(self) -> CalendarContext:
        return self._store.calendar

    def close(self) -> None:
        self._unsubscribe()

    def _on_store_change(self, change: StoreChange) -> None:
        logger.debug("Entry store %s, dropping cached insights", change.event.value)
        self._weekly_stats = None
        self._common_words = None

    # ---- Cached -----------------------------------------------------------

    def weekly_stats(self) -> Optional[statistics.WeeklyStats]:
        now = self._clock()
        week_start, _ = self.calendar.week_bounds(now)
        if self._weekly_stats is None or self._weekly_stats[0] != week_start:
            stats = statistics.weekly_stats(self._store.entries, self.calendar, now)
            self._weekly_stats = (week_start, stats)
        return self._weekly_stats[1]

    def common_words(self) -> list[str]:
        if self._common_words is None:
            self._common_words = statistics.common_words(self._store.entries)
        return list(self._common_words)

    # ---- Computed on demand -----------------------------------------------

    def summary(self) -> Optional[statistics.MoodInsight]:
        return statistics.summary_insight(self._store.entries, self._clock())

    def time_patterns(self) -> dict[str, float]:
        return patterns.time_patterns(self._store.entries, self.calendar)

    def weekly_patterns(self) -> dict[str, float]:
        return patterns.weekly_patterns(self._store.entries, self.calendar)

    def trend(self) -> patterns.MoodTrend:
        return patterns.trend(self._store.entries, self.calendar)

    def average_score(self) -> float:
        return patterns.average_mood_score(self._store.entries)

    def variance(self) -> float:
        return patterns.mood_variance([e.mood_value for e in self._store.entries])

    def distribution(self) -> dict[MoodType, int]:
        return patterns.mood_distribution(self._store.entries)

    def most_active_day(self) -> Optional[str]:
        return patterns.most_active_day(self._store.entries, self.calendar)

    def category_correlations(self) -> dict[str, correlation.MoodCorrelation]:
        return correlation.category_correlations(self._store.entries)

    def health_correlations(self) -> dict[str, correlation.HealthCorrelation]:
        return correlation.health_correlations(
            self._store.entries, self._health.signals, self.calendar
        )

    def predict(self, at: Optional[datetime] = None) -> Optional[prediction.MoodPrediction]:
        return prediction.predict(
            self._store.entries,
            self.calendar,
            at or self._clock(),
            personality=self._profiles.load(),
        )


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_insights: JournalInsights | None = None


def get_journal_insights() -> JournalInsights:
    global _default_insights
    if _default_insights is None:
        _default_insights = JournalInsights(
            get_entry_store(), get_health_registry(), get_profile_store()
        )
    return _default_insights

"""
Health Signal Registry
======================
Daily health signals (steps, sleep, heart rate) keyed by calendar day.

Signals arrive two ways:
- pushed by the app through ``POST /api/v1/health/sync`` (upsert per day), or
- pulled from a :class:`HealthSignalProvider` for every day that has an entry.

Re-syncing a day overwrites the previous values; there is never more than one
signal per day. Health data is optional everywhere: an empty registry simply
makes the health correlations come back empty.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Iterable, Mapping, Optional, Protocol

from moodjournal.calendar_context import CalendarContext, get_calendar_context
from moodjournal.models.health import DailyHealthSignal
from moodjournal.models.mood import MoodEntry

logger = logging.getLogger(__name__)


class HealthSignalProvider(Protocol):
    """Anything that can produce one day of health data (HealthKit bridge, Oura, ...)."""

    async def fetch_daily(self, day: date) -> Optional[DailyHealthSignal]: ...


class HealthSignalRegistry:
    """In-memory map of calendar day -> DailyHealthSignal."""

    def __init__(self, calendar: CalendarContext | None = None) -> None:
        self._calendar = calendar or get_calendar_context()
        self._signals: dict[date, DailyHealthSignal] = {}

    @property
    def signals(self) -> Mapping[date, DailyHealthSignal]:
        return dict(self._signals)

    def __len__(self) -> int:
        return len(self._signals)

    def upsert(self, signal: DailyHealthSignal) -> DailyHealthSignal:
        self._signals[signal.date] = signal
        return signal

    def get(self, day: date) -> Optional[DailyHealthSignal]:
        return self._signals.get(day)

    def for_entry(self, entry: MoodEntry) -> Optional[DailyHealthSignal]:
        return self._signals.get(self._calendar.day_of(entry.date))

    def clear(self) -> None:
        self._signals.clear()

    async def load_for_entries(
        self,
        entries: Iterable[MoodEntry],
        provider: HealthSignalProvider,
    ) -> int:
        """Fetch a signal for every distinct entry day. Returns how many were stored.

        A provider failure for one day is logged and that day is skipped; the
        others still load.
        """
        days = sorted({self._calendar.day_of(e.date) for e in entries})
        if not days:
            return 0

        results = await asyncio.gather(
            *(provider.fetch_daily(day) for day in days),
            return_exceptions=True,
        )

        stored = 0
        for day, result in zip(days, results):
            if isinstance(result, Exception):
                logger.warning("Health data fetch failed for %s: %s", day, result)
                continue
            if result is None:
                continue
            # Key by the day we asked for, whatever date the provider stamped
            self._signals[day] = result.model_copy(update={"date": day})
            stored += 1

        logger.info("Loaded health data for %d of %d entry days", stored, len(days))
        return stored


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_registry: HealthSignalRegistry | None = None


def get_health_registry() -> HealthSignalRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = HealthSignalRegistry()
    return _default_registry

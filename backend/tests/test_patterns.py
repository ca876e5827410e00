"""
Tests for the pattern service
=============================
Covers:
- Time-of-day and weekday averages; empty buckets absent
- Trend: fewer than 3 entries, exactly 3, improving, declining, 7-entry window
- Best time / best days helpers
- Average score default, sample variance, full distribution, most active day

Run: pytest backend/tests/test_patterns.py -v
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from moodjournal.calendar_context import CalendarContext
from moodjournal.models.mood import MoodEntry, MoodType
from moodjournal.services.patterns import (
    MoodTrend,
    average_mood_score,
    best_days_of_week,
    best_time_of_day,
    mood_distribution,
    mood_variance,
    most_active_day,
    time_patterns,
    trend,
    weekly_patterns,
)

CALENDAR = CalendarContext()
# Thursday
BASE = datetime(2026, 3, 5, 9, 0, tzinfo=timezone.utc)


def _entry(mood: MoodType, when: datetime) -> MoodEntry:
    return MoodEntry(mood=mood, date=when)


def _daily(moods: list[MoodType]) -> list[MoodEntry]:
    """One entry per day, oldest first in *moods*, returned newest first."""
    entries = [_entry(mood, BASE + timedelta(days=i)) for i, mood in enumerate(moods)]
    return list(reversed(entries))


class TestBucketedAverages:

    def test_time_patterns(self):
        entries = [
            _entry(MoodType.GOOD, BASE.replace(hour=8)),
            _entry(MoodType.OKAY, BASE.replace(hour=10)),
            _entry(MoodType.TOUGH, BASE.replace(hour=22)),
        ]
        result = time_patterns(entries, CALENDAR)
        assert result == {"morning": pytest.approx(4.5), "night": pytest.approx(2.0)}
        assert "afternoon" not in result

    def test_weekly_patterns(self):
        entries = [
            _entry(MoodType.AMAZING, BASE),                        # Thursday
            _entry(MoodType.GOOD, BASE + timedelta(days=7)),       # Thursday
            _entry(MoodType.OVERWHELMING, BASE + timedelta(days=1)),  # Friday
        ]
        result = weekly_patterns(entries, CALENDAR)
        assert result == {"Thursday": pytest.approx(5.5), "Friday": pytest.approx(1.0)}

    def test_empty_entries(self):
        assert time_patterns([], CALENDAR) == {}
        assert weekly_patterns([], CALENDAR) == {}

    def test_best_helpers(self):
        patterns = {"Monday": 2.0, "Friday": 5.5, "Sunday": 4.0, "Tuesday": 3.0}
        assert best_days_of_week(patterns) == ["Friday", "Sunday", "Tuesday"]
        assert best_time_of_day({"morning": 3.0, "evening": 4.0}) == "evening"
        assert best_time_of_day({}) is None


class TestTrend:

    def test_fewer_than_three_is_stable(self):
        assert trend(_daily([MoodType.OVERWHELMING, MoodType.AMAZING])) is MoodTrend.STABLE

    def test_exactly_three_is_always_stable(self):
        moods = [MoodType.OVERWHELMING, MoodType.OVERWHELMING, MoodType.AMAZING]
        assert trend(_daily(moods), CALENDAR) is MoodTrend.STABLE

    def test_improving(self):
        moods = [MoodType.TOUGH, MoodType.TOUGH, MoodType.CHALLENGING,
                 MoodType.OKAY, MoodType.GOOD, MoodType.GOOD]
        assert trend(_daily(moods), CALENDAR) is MoodTrend.IMPROVING

    def test_declining(self):
        moods = [MoodType.AMAZING, MoodType.GOOD, MoodType.GOOD,
                 MoodType.TOUGH, MoodType.TOUGH, MoodType.OVERWHELMING]
        assert trend(_daily(moods), CALENDAR) is MoodTrend.DECLINING

    def test_small_difference_is_stable(self):
        moods = [MoodType.OKAY, MoodType.OKAY, MoodType.OKAY,
                 MoodType.OKAY, MoodType.OKAY, MoodType.GOOD]
        # +1 on one of three entries is a 0.33 shift
        assert trend(_daily(moods), CALENDAR) is MoodTrend.STABLE

    def test_only_latest_seven_are_considered(self):
        old_lows = [MoodType.OVERWHELMING] * 5
        recent = [MoodType.GOOD] * 7
        assert trend(_daily(old_lows + recent), CALENDAR) is MoodTrend.STABLE

    def test_collection_order_does_not_matter(self):
        moods = [MoodType.TOUGH, MoodType.TOUGH, MoodType.TOUGH,
                 MoodType.AMAZING, MoodType.AMAZING, MoodType.AMAZING]
        shuffled = _daily(moods)
        shuffled = shuffled[3:] + shuffled[:3]
        assert trend(shuffled, CALENDAR) is MoodTrend.IMPROVING


class TestDescriptive:

    def test_average_default(self):
        assert average_mood_score([]) == 3.0

    def test_average(self):
        assert average_mood_score(_daily([MoodType.GOOD, MoodType.OKAY])) == pytest.approx(4.5)

    def test_variance(self):
        assert mood_variance([5.0]) == 0.0
        assert mood_variance([2.0, 4.0, 6.0]) == pytest.approx(4.0)

    def test_distribution_lists_every_mood(self):
        dist = mood_distribution(_daily([MoodType.GOOD, MoodType.GOOD, MoodType.TOUGH]))
        assert set(dist) == set(MoodType)
        assert dist[MoodType.GOOD] == 2
        assert dist[MoodType.AMAZING] == 0

    def test_most_active_day(self):
        entries = [
            _entry(MoodType.GOOD, BASE),
            _entry(MoodType.GOOD, BASE + timedelta(hours=3)),
            _entry(MoodType.GOOD, BASE + timedelta(days=1)),
        ]
        assert most_active_day(entries, CALENDAR) == "Thursday"
        assert most_active_day([], CALENDAR) is None

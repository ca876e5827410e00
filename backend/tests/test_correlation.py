"""
Tests for the correlation service
=================================
Covers:
- Tag impact: only tags seen 3+ times, impact relative to the overall mean
- Strength buckets (weak / moderate / strong)
- Pearson r: identical series, inverse series, zero variance, length mismatch
- Health correlations: fewer than 3 paired days omitted, no signals -> {}
- Health correlations: zero-valued metrics excluded, p-value reported
- Health correlations: entries matched to signals by local calendar day

Run: pytest backend/tests/test_correlation.py -v
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from moodjournal.calendar_context import CalendarContext
from moodjournal.models.health import DailyHealthSignal
from moodjournal.models.mood import CategorySelection, MoodEntry, MoodType
from moodjournal.services.correlation import (
    CorrelationStrength,
    category_correlations,
    determine_strength,
    health_correlations,
    pearson_correlation,
)

CALENDAR = CalendarContext()
BASE = datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc)


def _entry(mood: MoodType, day_offset: int = 0, tags: list[str] | None = None) -> MoodEntry:
    categories = (
        [CategorySelection(category_name="Hobbies", selected_options=tags)] if tags else []
    )
    return MoodEntry(mood=mood, date=BASE + timedelta(days=day_offset), categories=categories)


def _signal(day_offset: int, sleep: float = 0.0, steps: int = 0, heart: float = 0.0):
    return DailyHealthSignal(
        date=(BASE + timedelta(days=day_offset)).date(),
        sleep_hours=sleep,
        step_count=steps,
        average_heart_rate=heart,
    )


# ---------------------------------------------------------------------------
# Category tags
# ---------------------------------------------------------------------------

class TestCategoryCorrelations:

    def test_tag_needs_three_occurrences(self):
        entries = [
            _entry(MoodType.AMAZING, 0, ["exercise", "music"]),
            _entry(MoodType.AMAZING, 1, ["exercise", "music"]),
            _entry(MoodType.AMAZING, 2, ["exercise"]),
            _entry(MoodType.TOUGH, 3),
        ]
        result = category_correlations(entries)
        assert set(result) == {"exercise"}

    def test_impact_relative_to_overall_average(self):
        entries = [
            _entry(MoodType.AMAZING, 0, ["exercise"]),
            _entry(MoodType.AMAZING, 1, ["exercise"]),
            _entry(MoodType.AMAZING, 2, ["exercise"]),
            _entry(MoodType.OVERWHELMING, 3),
            _entry(MoodType.OVERWHELMING, 4),
        ]
        # overall (6*3 + 1*2) / 5 = 4.0, exercise mean 6.0
        exercise = category_correlations(entries)["exercise"]
        assert exercise.impact == pytest.approx(2.0)
        assert exercise.frequency == 3
        assert exercise.strength is CorrelationStrength.WEAK

    def test_no_tags(self):
        assert category_correlations([_entry(MoodType.GOOD)]) == {}
        assert category_correlations([]) == {}

    @pytest.mark.parametrize(
        "impact,frequency,expected",
        [
            (1.5, 6, CorrelationStrength.STRONG),
            (-1.5, 6, CorrelationStrength.STRONG),
            (1.5, 5, CorrelationStrength.MODERATE),
            (0.8, 4, CorrelationStrength.MODERATE),
            (0.8, 3, CorrelationStrength.WEAK),
            (0.5, 10, CorrelationStrength.WEAK),
        ],
    )
    def test_strength_buckets(self, impact, frequency, expected):
        assert determine_strength(impact, frequency) is expected


# ---------------------------------------------------------------------------
# Pearson
# ---------------------------------------------------------------------------

class TestPearson:

    def test_identical_series(self):
        assert pearson_correlation([1, 2, 3, 4], [1, 2, 3, 4]) == pytest.approx(1.0)

    def test_inverse_series(self):
        assert pearson_correlation([1, 2, 3], [6, 4, 2]) == pytest.approx(-1.0)

    def test_zero_variance_returns_zero(self):
        assert pearson_correlation([3, 3, 3], [1, 2, 3]) == 0.0
        assert pearson_correlation([1, 2, 3], [5, 5, 5]) == 0.0

    def test_undefined_inputs_return_zero(self):
        assert pearson_correlation([1, 2], [1, 2, 3]) == 0.0
        assert pearson_correlation([1], [1]) == 0.0
        assert pearson_correlation([], []) == 0.0


# ---------------------------------------------------------------------------
# Health signals
# ---------------------------------------------------------------------------

class TestHealthCorrelations:

    def test_no_signals(self):
        entries = [_entry(MoodType.GOOD, i) for i in range(5)]
        assert health_correlations(entries, {}, CALENDAR) == {}
        assert health_correlations(entries, None, CALENDAR) == {}

    def test_fewer_than_three_pairs_omitted(self):
        entries = [_entry(MoodType.GOOD, 0), _entry(MoodType.TOUGH, 1), _entry(MoodType.OKAY, 5)]
        signals = {s.date: s for s in (_signal(0, sleep=8), _signal(1, sleep=5))}
        assert health_correlations(entries, signals, CALENDAR) == {}

    def test_sleep_tracks_mood(self):
        moods = [MoodType.TOUGH, MoodType.CHALLENGING, MoodType.OKAY, MoodType.GOOD]
        entries = [_entry(mood, i) for i, mood in enumerate(moods)]
        signals = {
            s.date: s
            for s in (
                _signal(0, sleep=5.0, steps=9000),
                _signal(1, sleep=6.0, steps=9000),
                _signal(2, sleep=7.0, steps=9000),
                _signal(3, sleep=8.0, steps=9000),
            )
        }

        result = health_correlations(entries, signals, CALENDAR)

        sleep = result["sleep"]
        assert sleep.coefficient == pytest.approx(1.0)
        assert sleep.sample_size == 4
        assert sleep.direction == "positive"
        assert 0.0 <= sleep.p_value < 0.05

        # Constant step count: defined but no relationship
        assert result["activity"].coefficient == 0.0
        assert result["activity"].p_value == 1.0

        # Heart rate never recorded
        assert "heart_rate" not in result

    def test_entries_matched_by_local_day(self):
        calendar = CalendarContext.from_names("America/New_York", "monday")
        # 01:00 UTC on the 2nd is still the 1st in New York
        late = datetime(2026, 3, 2, 1, 0, tzinfo=timezone.utc)
        entries = [
            MoodEntry(mood=MoodType.TOUGH, date=late),
            MoodEntry(mood=MoodType.GOOD, date=late + timedelta(days=1)),
            MoodEntry(mood=MoodType.AMAZING, date=late + timedelta(days=2)),
        ]
        signals = {
            date(2026, 3, 1): DailyHealthSignal(date=date(2026, 3, 1), sleep_hours=4.0),
            date(2026, 3, 2): DailyHealthSignal(date=date(2026, 3, 2), sleep_hours=7.0),
            date(2026, 3, 3): DailyHealthSignal(date=date(2026, 3, 3), sleep_hours=8.0),
        }

        result = health_correlations(entries, signals, calendar)
        assert result["sleep"].sample_size == 3
        assert result["sleep"].coefficient > 0.9

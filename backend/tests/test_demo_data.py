"""
Tests for demo data, the category catalog and affirmations
==========================================================
Covers:
- Demo week: seven entries, newest first, tagged
- get_entry_store seeds demo entries only when enabled and empty
- Category lookup is case-insensitive
- Affirmations: deterministic with a seeded RNG, fallback to 'good' lines

Run: pytest backend/tests/test_demo_data.py -v
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from moodjournal.db.kv_store import InMemoryKeyValueStore
from moodjournal.models.categories import find_category
from moodjournal.models.mood import MoodType
from moodjournal.services import entry_store
from moodjournal.services.affirmations import AFFIRMATIONS, get_affirmation
from moodjournal.services.demo_data import demo_entries

NOW = datetime(2026, 3, 8, 20, 0, tzinfo=timezone.utc)


class TestDemoEntries:

    def test_seven_entries_newest_first(self):
        entries = demo_entries(NOW)
        assert len(entries) == 7
        assert [e.date for e in entries] == sorted((e.date for e in entries), reverse=True)
        assert all(e.categories for e in entries)
        assert entries[0].mood is MoodType.GOOD


class TestSeeding:

    @pytest.fixture(autouse=True)
    def reset_singleton(self):
        entry_store._default_store = None
        yield
        entry_store._default_store = None

    def _get_store(self, kv, seed: bool):
        with (
            patch("moodjournal.services.entry_store.get_kv_store", return_value=kv),
            patch("moodjournal.services.entry_store.get_settings") as mock_settings,
        ):
            mock_settings.return_value = MagicMock(seed_demo_data=seed)
            return entry_store.get_entry_store()

    def test_seeds_empty_journal_when_enabled(self):
        store = self._get_store(InMemoryKeyValueStore(), seed=True)
        assert len(store) == 7

    def test_no_seed_when_disabled(self):
        store = self._get_store(InMemoryKeyValueStore(), seed=False)
        assert len(store) == 0

    def test_existing_entries_not_overwritten(self):
        kv = InMemoryKeyValueStore({
            "entries:snapshot": '[{"mood": "tough", "date": "2026-03-01T10:00:00Z"}]'
        })
        store = self._get_store(kv, seed=True)
        assert len(store) == 1
        assert store.entries[0].mood is MoodType.TOUGH


class TestCatalog:

    def test_find_category(self):
        assert find_category("EMOTIONS").name == "Emotions"
        assert find_category("missing") is None


class TestAffirmations:

    def test_seeded_rng_is_deterministic(self):
        a = get_affirmation(MoodType.CHALLENGING, random.Random(7))
        b = get_affirmation(MoodType.CHALLENGING, random.Random(7))
        assert a == b
        assert a in AFFIRMATIONS[MoodType.CHALLENGING]

    @pytest.mark.parametrize("mood", [MoodType.AMAZING, MoodType.TOUGH, MoodType.OVERWHELMING])
    def test_fallback_to_good(self, mood):
        assert get_affirmation(mood) in AFFIRMATIONS[MoodType.GOOD]

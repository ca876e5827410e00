"""
Demo Data
=========
A week of sample entries for a fictional user, used to populate an empty
journal when ``SEED_DEMO_DATA`` is enabled (store screenshots, demos).
"""

from __future__ import annotations

from datetime import datetime, timedelta

from moodjournal.models.mood import CategorySelection, MoodEntry, MoodType


def _tags(**groups: list[str]) -> list[CategorySelection]:
    return [
        CategorySelection(category_name=name, selected_options=options)
        for name, options in groups.items()
    ]


def demo_entries(now: datetime) -> list[MoodEntry]:
    """Seven entries, newest first, ending two hours before *now*."""
    return [
        MoodEntry(
            date=now - timedelta(hours=2),
            mood=MoodType.GOOD,
            text_entry=(
                "Had a wonderful morning workout! Feeling energized and ready "
                "for the day. Coffee tastes extra good today"
            ),
            categories=_tags(Emotions=["happy"], Hobbies=["exercise"], People=["none"]),
        ),
        MoodEntry(
            date=now - timedelta(days=1),
            mood=MoodType.GOOD,
            text_entry=(
                "Team lunch was amazing! Sarah shared some great news about her "
                "promotion. Love working with such inspiring people."
            ),
            categories=_tags(
                Emotions=["proud"], People=["friends"], Hobbies=["TV & content"]
            ),
        ),
        MoodEntry(
            date=now - timedelta(days=2),
            mood=MoodType.TOUGH,
            text_entry=(
                "Stressful day at work. The presentation didn't go as planned "
                "and I'm feeling a bit overwhelmed. Need some self-care time tonight."
            ),
            categories=_tags(Emotions=["stressed", "anxious"], People=["friends"]),
        ),
        MoodEntry(
            date=now - timedelta(days=3),
            mood=MoodType.GOOD,
            text_entry=(
                "Perfect weather for a weekend hike! The view from the mountain "
                "was absolutely breathtaking. Grateful for moments like these"
            ),
            categories=_tags(
                Emotions=["grateful"], Hobbies=["exercise"], Weather=["sunny"]
            ),
        ),
        MoodEntry(
            date=now - timedelta(days=4),
            mood=MoodType.GOOD,
            text_entry=(
                "Movie night with mom. We watched her favorite classic and shared "
                "so many laughs. These simple moments mean everything"
            ),
            categories=_tags(Emotions=["happy"], People=["family"], Hobbies=["movie"]),
        ),
        MoodEntry(
            date=now - timedelta(days=5),
            mood=MoodType.CHALLENGING,
            text_entry=(
                "Feeling a bit lonely today. Friends are all busy and I'm missing "
                "having someone to talk to. Maybe I'll call my sister later."
            ),
            categories=_tags(Emotions=["lonely", "sad"], People=["none"]),
        ),
        MoodEntry(
            date=now - timedelta(days=6),
            mood=MoodType.GOOD,
            text_entry=(
                "Started reading a new book today - 'Atomic Habits'. Already "
                "feeling motivated to build better routines. Knowledge is power!"
            ),
            categories=_tags(Emotions=["excited"], Hobbies=["reading"]),
        ),
    ]

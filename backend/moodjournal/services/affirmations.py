"""
Affirmations
============
Short lines shown after saving an entry.
"""

from __future__ import annotations

import random

from moodjournal.models.mood import MoodType

AFFIRMATIONS: dict[MoodType, tuple[str, ...]] = {
    MoodType.GOOD: (
        "You made it through. That counts.",
        "Small wins matter too.",
        "This feeling is worth noting.",
        "You're building something beautiful.",
    ),
    MoodType.CHALLENGING: (
        "Bad days don't define you.",
        "Noted. Now let it go.",
        "Tomorrow is unwritten.",
        "You're stronger than this moment.",
        "This too shall pass.",
    ),
}


def get_affirmation(mood: MoodType, rng: random.Random | None = None) -> str:
    # Only good and challenging have their own lines; everything else borrows good's
    lines = AFFIRMATIONS.get(mood, AFFIRMATIONS[MoodType.GOOD])
    return (rng or random).choice(lines)

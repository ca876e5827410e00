"""
Category Catalog
================
The category groups and options offered when tagging an entry. Tags on an
entry are free-form strings; this catalog is what the app suggests, not a
whitelist.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class MoodCategory(BaseModel):
    name: str
    icon: str
    options: list[str] = Field(default_factory=list)
    is_enabled: bool = True


DEFAULT_CATEGORIES: tuple[MoodCategory, ...] = (
    MoodCategory(
        name="Emotions",
        icon="heart.fill",
        options=[
            "excited", "relaxed", "proud", "hopeful", "happy", "enthusiastic",
            "refreshed", "calm", "grateful", "depressed", "lonely", "anxious",
            "sad", "angry", "pressured", "annoyed", "tired", "stressed", "bored",
        ],
    ),
    MoodCategory(
        name="People",
        icon="person.2.fill",
        options=["friends", "family", "partner", "none"],
    ),
    MoodCategory(
        name="Weather",
        icon="cloud.sun.fill",
        options=["sunny", "cloudy", "rainy", "snowy", "windy", "stormy", "hot", "cold"],
    ),
    MoodCategory(
        name="Hobbies",
        icon="gamecontroller.fill",
        options=[
            "exercise", "TV & content", "movie", "gaming", "reading", "walk",
            "music", "drawing",
        ],
    ),
)


def find_category(name: str) -> MoodCategory | None:
    for category in DEFAULT_CATEGORIES:
        if category.name.lower() == name.lower():
            return category
    return None

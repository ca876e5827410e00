"""
Mood Entry Schemas
==================
Pydantic models for mood entries. These are both the persisted snapshot
format and the contract between the mobile app and the backend.

Key design decisions:
- MoodEntry is frozen. An "edit" is a delete followed by a new save.
- Media is stored by reference only (path or URL), never as bytes.
- Unknown fields are ignored on read so older builds can load snapshots
  written by newer ones.
- An unknown mood string decodes as ``good`` so that every stored entry
  keeps a numeric value.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Mood scale
# ---------------------------------------------------------------------------


class MainMoodCategory(str, Enum):
    POSITIVE = "positive"
    DIFFICULT = "difficult"


class MoodType(str, Enum):
    AMAZING = "amazing"
    GOOD = "good"
    OKAY = "okay"
    CHALLENGING = "challenging"
    TOUGH = "tough"
    OVERWHELMING = "overwhelming"

    @property
    def numeric_value(self) -> float:
        return _NUMERIC_VALUES[self]

    @property
    def main_category(self) -> MainMoodCategory:
        if self in (MoodType.AMAZING, MoodType.GOOD, MoodType.OKAY):
            return MainMoodCategory.POSITIVE
        return MainMoodCategory.DIFFICULT

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()} Day"

    @classmethod
    def from_value(cls, score: float) -> "MoodType":
        """Nearest mood to a continuous 1.0-6.0 score (clamped)."""
        clamped = min(max(score, 1.0), 6.0)
        return min(cls, key=lambda m: abs(m.numeric_value - clamped))


_NUMERIC_VALUES: dict[MoodType, float] = {
    MoodType.OVERWHELMING: 1.0,
    MoodType.TOUGH: 2.0,
    MoodType.CHALLENGING: 3.0,
    MoodType.OKAY: 4.0,
    MoodType.GOOD: 5.0,
    MoodType.AMAZING: 6.0,
}


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------


class CategorySelection(BaseModel):
    """Options the user picked within one category group, e.g. Emotions."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    category_name: str
    selected_options: list[str] = Field(default_factory=list)
    date: datetime = Field(default_factory=_utcnow)


class MoodEntry(BaseModel):
    """One journal entry. Never mutated after creation."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    date: datetime = Field(default_factory=_utcnow)
    mood: MoodType
    text_entry: Optional[str] = None
    audio_ref: Optional[str] = None
    audio_transcript: Optional[str] = None
    photo_ref: Optional[str] = None
    categories: list[CategorySelection] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("mood", mode="before")
    @classmethod
    def _fallback_unknown_mood(cls, value):
        if isinstance(value, MoodType):
            return value
        try:
            return MoodType(value)
        except ValueError:
            logger.warning("Unknown mood %r in stored entry, reading as 'good'", value)
            return MoodType.GOOD

    @property
    def mood_value(self) -> float:
        return self.mood.numeric_value

    @property
    def has_audio(self) -> bool:
        return self.audio_ref is not None

    @property
    def has_text(self) -> bool:
        return bool(self.text_entry)

    @property
    def has_photo(self) -> bool:
        return self.photo_ref is not None

    @property
    def display_text(self) -> str:
        """Transcript wins over typed text when both exist."""
        if self.audio_transcript is not None:
            return self.audio_transcript
        return self.text_entry or ""

    def tag_options(self) -> list[str]:
        return [option for c in self.categories for option in c.selected_options]


# ---------------------------------------------------------------------------
# Request / response
# ---------------------------------------------------------------------------


class CategorySelectionIn(BaseModel):
    category_name: str = Field(..., min_length=1, max_length=50)
    selected_options: list[str] = Field(default_factory=list)


class MoodEntryCreate(BaseModel):
    """Payload the mobile app sends when the user saves a mood."""

    mood: MoodType
    date: Optional[datetime] = Field(
        default=None,
        description=(
            "Day the entry is for. Omit for 'now'; pass a past timestamp "
            "to backfill a missed day."
        ),
    )
    text_entry: Optional[str] = Field(default=None, max_length=5000)
    audio_ref: Optional[str] = None
    audio_transcript: Optional[str] = Field(default=None, max_length=5000)
    photo_ref: Optional[str] = None
    categories: list[CategorySelectionIn] = Field(default_factory=list)


class SaveEntryResponse(BaseModel):
    """Returned after a save. The entry is kept in memory even if persisting failed."""

    entry: MoodEntry
    persisted: bool
    error_message: Optional[str] = None

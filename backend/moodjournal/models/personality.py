"""
User Personality Schemas
========================
Trait and preference profile stored under its own key. Once computed it is
always present: missing sub-records decode to their defaults rather than
failing.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CommunicationFrequency(str, Enum):
    MINIMAL = "minimal"
    MODERATE = "moderate"
    FREQUENT = "frequent"


class ResponseLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    DETAILED = "detailed"


class Formality(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    FRIENDLY = "friendly"


class LearningFormat(str, Enum):
    CONVERSATIONAL = "conversational"
    STRUCTURED = "structured"
    EXPLORATORY = "exploratory"


class LearningPace(str, Enum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"


class InteractionStyle(str, Enum):
    GUIDED = "guided"
    AUTONOMOUS = "autonomous"
    COLLABORATIVE = "collaborative"


class PersonalityTraits(BaseModel):
    model_config = ConfigDict(extra="ignore")

    openness: float = Field(default=0.5, ge=0.0, le=1.0)
    conscientiousness: float = Field(default=0.5, ge=0.0, le=1.0)
    extraversion: float = Field(default=0.5, ge=0.0, le=1.0)
    agreeableness: float = Field(default=0.5, ge=0.0, le=1.0)
    neuroticism: float = Field(default=0.5, ge=0.0, le=1.0)
    description: str = "Balanced personality"


class UserPreferences(BaseModel):
    model_config = ConfigDict(extra="ignore")

    communication_frequency: CommunicationFrequency = CommunicationFrequency.MODERATE
    preferred_response_length: ResponseLength = ResponseLength.MEDIUM
    topics: list[str] = Field(default_factory=list)
    triggers: list[str] = Field(default_factory=list)


class CommunicationStyle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    formality: Formality = Formality.CASUAL
    empathy: float = Field(default=0.8, ge=0.0, le=1.0)
    directness: float = Field(default=0.6, ge=0.0, le=1.0)


class LearningStyle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    preferred_format: LearningFormat = LearningFormat.CONVERSATIONAL
    pace: LearningPace = LearningPace.MODERATE
    interaction_style: InteractionStyle = InteractionStyle.GUIDED


class UserPersonality(BaseModel):
    model_config = ConfigDict(extra="ignore")

    traits: PersonalityTraits = Field(default_factory=PersonalityTraits)
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    communication_style: CommunicationStyle = Field(default_factory=CommunicationStyle)
    learning_style: LearningStyle = Field(default_factory=LearningStyle)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

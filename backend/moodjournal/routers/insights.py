"""
Insights Router
===============
GET /api/v1/insights/patterns      Averages by time and weekday, trend, spread
GET /api/v1/insights/correlations  Tag impact and health-signal correlations
GET /api/v1/insights/weekly        Weekly stats, common words, summary insight
GET /api/v1/insights/prediction    Rule-based mood estimate for now
GET /api/v1/insights/affirmation   A line to show after saving

Every section degrades to empty/null with too little data; none of these
endpoints returns an error because a user is new.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from moodjournal.models.mood import MoodType
from moodjournal.services.affirmations import get_affirmation
from moodjournal.services.insights import get_journal_insights
from moodjournal.services.patterns import best_days_of_week, best_time_of_day

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/insights", tags=["insights"])


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class PatternsResponse(BaseModel):
    time_of_day: dict[str, float]
    weekday: dict[str, float]
    trend: str
    best_time_of_day: Optional[str] = None
    best_days: list[str]
    average_score: float
    variance: float
    distribution: dict[str, int]
    most_active_day: Optional[str] = None


class CategoryCorrelationOut(BaseModel):
    impact: float
    strength: str
    frequency: int


class HealthCorrelationOut(BaseModel):
    coefficient: float
    p_value: float
    sample_size: int
    direction: str


class CorrelationsResponse(BaseModel):
    categories: dict[str, CategoryCorrelationOut]
    health: dict[str, HealthCorrelationOut]


class WeeklyStatsOut(BaseModel):
    total_entries: int
    positive_percentage: float
    streak: int


class SummaryInsightOut(BaseModel):
    type: str
    title: str
    message: str
    tips: list[str]
    confidence: float


class WeeklyResponse(BaseModel):
    stats: Optional[WeeklyStatsOut] = None
    common_words: list[str]
    summary: Optional[SummaryInsightOut] = None


class PredictionOut(BaseModel):
    predicted_mood: MoodType
    confidence: float
    confidence_text: str
    score: float
    reasons: list[str]
    suggested_categories: list[str]
    time_of_prediction: datetime
    season: str
    is_workday: bool


class PredictionResponse(BaseModel):
    prediction: Optional[PredictionOut] = None


class AffirmationResponse(BaseModel):
    mood: MoodType
    text: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/patterns", response_model=PatternsResponse, summary="Mood patterns")
async def get_patterns() -> PatternsResponse:
    insights = get_journal_insights()
    time_of_day = insights.time_patterns()
    weekday = insights.weekly_patterns()

    return PatternsResponse(
        time_of_day=time_of_day,
        weekday=weekday,
        trend=insights.trend().value,
        best_time_of_day=best_time_of_day(time_of_day),
        best_days=best_days_of_week(weekday),
        average_score=insights.average_score(),
        variance=insights.variance(),
        distribution={mood.value: count for mood, count in insights.distribution().items()},
        most_active_day=insights.most_active_day(),
    )


@router.get("/correlations", response_model=CorrelationsResponse, summary="Mood correlations")
async def get_correlations() -> CorrelationsResponse:
    insights = get_journal_insights()

    categories = {
        tag: CategoryCorrelationOut(
            impact=c.impact, strength=c.strength.value, frequency=c.frequency
        )
        for tag, c in insights.category_correlations().items()
    }
    health = {
        key: HealthCorrelationOut(
            coefficient=h.coefficient,
            p_value=h.p_value,
            sample_size=h.sample_size,
            direction=h.direction,
        )
        for key, h in insights.health_correlations().items()
    }

    return CorrelationsResponse(categories=categories, health=health)


@router.get("/weekly", response_model=WeeklyResponse, summary="Weekly summary")
async def get_weekly() -> WeeklyResponse:
    insights = get_journal_insights()
    stats = insights.weekly_stats()
    summary = insights.summary()

    return WeeklyResponse(
        stats=(
            WeeklyStatsOut(
                total_entries=stats.total_entries,
                positive_percentage=stats.positive_percentage,
                streak=stats.streak,
            )
            if stats
            else None
        ),
        common_words=insights.common_words(),
        summary=(
            SummaryInsightOut(
                type=summary.type.value,
                title=summary.title,
                message=summary.message,
                tips=summary.tips,
                confidence=summary.confidence,
            )
            if summary
            else None
        ),
    )


@router.get("/prediction", response_model=PredictionResponse, summary="Mood prediction")
async def get_prediction() -> PredictionResponse:
    result = get_journal_insights().predict()
    if result is None:
        return PredictionResponse(prediction=None)

    return PredictionResponse(
        prediction=PredictionOut(
            predicted_mood=result.predicted_mood,
            confidence=result.confidence,
            confidence_text=result.confidence_text,
            score=result.score,
            reasons=result.reasons,
            suggested_categories=result.suggested_categories,
            time_of_prediction=result.time_of_prediction,
            season=result.season.value,
            is_workday=result.is_workday,
        )
    )


@router.get("/affirmation", response_model=AffirmationResponse, summary="Affirmation for a mood")
async def get_mood_affirmation(mood: MoodType = Query(...)) -> AffirmationResponse:
    return AffirmationResponse(mood=mood, text=get_affirmation(mood))

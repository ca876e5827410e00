"""
Health Signal Router
====================
POST /api/v1/health/sync   Upsert one day of health data
GET  /api/v1/health/{day}  Health data stored for a day

Re-syncing the same day overwrites the stored values, so the app can push
today's numbers as often as it likes without creating duplicates.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, status

from moodjournal.models.health import DailyHealthSignal
from moodjournal.services.health_signals import get_health_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.post(
    "/sync",
    response_model=DailyHealthSignal,
    status_code=status.HTTP_200_OK,
    summary="Sync a day of health data",
)
async def sync_health_signal(body: DailyHealthSignal) -> DailyHealthSignal:
    stored = get_health_registry().upsert(body)
    logger.debug("Synced health data for %s", stored.date)
    return stored


@router.get(
    "/{day}",
    response_model=DailyHealthSignal,
    summary="Health data for one day",
    responses={404: {"description": "No health data for that day"}},
)
async def get_health_signal(day: date) -> DailyHealthSignal:
    signal = get_health_registry().get(day)
    if signal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": f"No health data for {day.isoformat()}", "code": "health_not_found"},
        )
    return signal

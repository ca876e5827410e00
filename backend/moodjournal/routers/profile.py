"""
Profile Router
==============
GET /api/v1/profile  The personality profile, created with defaults on first read.
"""

from __future__ import annotations

from fastapi import APIRouter

from moodjournal.models.personality import UserPersonality
from moodjournal.services.personality import get_profile_store

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


@router.get("", response_model=UserPersonality, summary="Personality profile")
async def get_profile() -> UserPersonality:
    return get_profile_store().ensure()

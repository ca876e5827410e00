"""
Mood Entries Router
===================
POST   /api/v1/entries               Save a mood entry (today or backdated)
GET    /api/v1/entries               List entries, optionally filtered
GET    /api/v1/entries/day/{day}     First entry on a calendar day
DELETE /api/v1/entries/{entry_id}    Delete one entry
DELETE /api/v1/entries               Delete everything
GET    /api/v1/entries/categories    Category groups offered for tagging

The store owns ordering and persistence. If writing the snapshot fails the
entry is still kept in memory and the response says so (``persisted`` is
False, ``error_message`` is set) instead of failing the request: the next
successful write will include it.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status

from moodjournal.models.categories import DEFAULT_CATEGORIES, MoodCategory, find_category
from moodjournal.models.mood import (
    CategorySelection,
    MoodEntry,
    MoodEntryCreate,
    MoodType,
    SaveEntryResponse,
)
from moodjournal.services.entry_store import get_entry_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/entries", tags=["entries"])


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=SaveEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a mood entry",
    responses={
        201: {"description": "Entry created (check `persisted` for write status)"},
        422: {"description": "Validation error (unknown mood, oversized text, etc.)"},
    },
)
async def save_entry(body: MoodEntryCreate) -> SaveEntryResponse:
    store = get_entry_store()

    entry = store.save(
        body.mood,
        date=body.date,
        text=body.text_entry,
        audio_ref=body.audio_ref,
        audio_transcript=body.audio_transcript,
        photo_ref=body.photo_ref,
        categories=[
            CategorySelection(
                category_name=c.category_name,
                selected_options=c.selected_options,
            )
            for c in body.categories
        ],
    )

    if store.error_message:
        logger.warning("Entry %s saved in memory only: %s", entry.id, store.error_message)

    return SaveEntryResponse(
        entry=entry,
        persisted=store.error_message is None,
        error_message=store.error_message,
    )


@router.get(
    "",
    response_model=list[MoodEntry],
    summary="List mood entries, newest first",
)
async def list_entries(
    mood: Optional[MoodType] = Query(default=None),
    has_audio: Optional[bool] = Query(default=None),
) -> list[MoodEntry]:
    return get_entry_store().filter(mood=mood, has_audio=has_audio)


@router.get(
    "/categories",
    response_model=list[MoodCategory],
    summary="Category groups offered for tagging",
)
async def list_categories() -> list[MoodCategory]:
    return list(DEFAULT_CATEGORIES)


@router.get(
    "/categories/{name}",
    response_model=MoodCategory,
    summary="One category group by name",
)
async def get_category(name: str) -> MoodCategory:
    category = find_category(name)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": f"Unknown category: {name}", "code": "category_not_found"},
        )
    return category


@router.get(
    "/day/{day}",
    response_model=MoodEntry,
    summary="First entry recorded on a calendar day",
    responses={404: {"description": "No entry on that day"}},
)
async def get_entry_for_day(day: date) -> MoodEntry:
    store = get_entry_store()
    entry = store.get_entry(store.calendar.start_of_day(day))
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": f"No entry on {day.isoformat()}", "code": "entry_not_found"},
        )
    return entry


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one entry (no-op if it does not exist)",
)
async def delete_entry(entry_id: UUID) -> Response:
    if not get_entry_store().delete(entry_id):
        logger.debug("Delete requested for unknown entry %s", entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete every entry",
)
async def delete_all_entries() -> Response:
    get_entry_store().delete_all()
    logger.info("All mood entries deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

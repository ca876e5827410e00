"""
MoodJournal API
===============
FastAPI application entry point. Mount routers here.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodjournal.config import get_settings
from moodjournal.routers import entries, health, insights, profile

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="MoodJournal API",
    description="Mood entries, patterns and correlations for the journaling app",
    version="0.1.0",
    docs_url="/api/docs" if settings.environment != "production" else None,
    redoc_url="/api/redoc" if settings.environment != "production" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(entries.router)
app.include_router(insights.router)
app.include_router(health.router)
app.include_router(profile.router)


@app.get("/api/v1/status")
async def status_check() -> dict:
    return {"status": "ok", "service": "moodjournal-api"}

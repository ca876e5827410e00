"""
MoodJournal Configuration
=========================
All environment variables in one place. Pydantic Settings validates
types at startup so a typo in STORAGE_BACKEND fails on boot, not on the
first save.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Loaded from environment variables or a .env file."""

    # --- Persistence ---
    # memory: nothing survives a restart (tests, demos)
    # file: one JSON document on local disk
    # supabase: a key/value table in a Supabase project
    storage_backend: Literal["memory", "file", "supabase"] = "file"
    storage_path: str = "data/moodjournal.json"

    # --- Supabase (only read when storage_backend == "supabase") ---
    supabase_url: str = "http://localhost:54321"
    supabase_service_key: str = ""
    supabase_kv_table: str = "kv_settings"

    # --- Calendar ---
    # Same-day and same-week checks use local calendar boundaries in this zone.
    timezone: str = "UTC"
    week_start: Literal["monday", "sunday"] = "monday"

    # --- App settings ---
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]

    # Seed a week of sample entries when the journal is empty on first load.
    seed_demo_data: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""
Daily Health Signal Schemas
===========================
One calendar day of health data from the device's health store. Consumed by
the correlation analyzer; the journal never produces these itself.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class DailyHealthSignal(BaseModel):
    """Payload from HealthKit (or any provider) for one calendar day."""

    date: date
    step_count: int = Field(default=0, ge=0)
    sleep_hours: float = Field(default=0.0, ge=0.0)
    average_heart_rate: float = Field(default=0.0, ge=0.0)

"""
Calendar Context
================
Local-calendar arithmetic shared by the entry store and the analytics.

Every "same day" or "this week" question in the journal is answered in the
user's own timezone and with the user's preferred first day of the week.
Comparisons always use calendar-day boundaries, never rolling 24h windows:
23:50 and 00:10 are on different days even though they are 20 minutes apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from functools import lru_cache
from zoneinfo import ZoneInfo

from moodjournal.config import get_settings

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class WeekStartDay(str, Enum):
    MONDAY = "monday"
    SUNDAY = "sunday"

    @property
    def python_weekday(self) -> int:
        """Index used by :meth:`datetime.date.weekday` (Monday == 0)."""
        return 0 if self is WeekStartDay.MONDAY else 6


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        if 6 <= hour < 12:
            return cls.MORNING
        if 12 <= hour < 17:
            return cls.AFTERNOON
        if 17 <= hour < 21:
            return cls.EVENING
        return cls.NIGHT


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"

    @classmethod
    def from_month(cls, month: int) -> "Season":
        if 3 <= month <= 5:
            return cls.SPRING
        if 6 <= month <= 8:
            return cls.SUMMER
        if 9 <= month <= 11:
            return cls.AUTUMN
        return cls.WINTER


@dataclass(frozen=True)
class CalendarContext:
    """Timezone plus week-start preference."""

    tz: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))
    week_start: WeekStartDay = WeekStartDay.MONDAY

    @classmethod
    def from_names(cls, timezone_name: str, week_start: str) -> "CalendarContext":
        return cls(tz=ZoneInfo(timezone_name), week_start=WeekStartDay(week_start))

    # ---- Conversions ------------------------------------------------------

    def localize(self, dt: datetime) -> datetime:
        """Return *dt* as an aware datetime in this context's timezone.

        Naive datetimes are taken to already be local wall-clock time.
        """
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.tz)
        return dt.astimezone(self.tz)

    def day_of(self, dt: datetime) -> date:
        return self.localize(dt).date()

    def start_of_day(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    # ---- Comparisons ------------------------------------------------------

    def is_same_day(self, a: datetime, b: datetime) -> bool:
        return self.day_of(a) == self.day_of(b)

    def week_bounds(self, now: datetime) -> tuple[datetime, datetime]:
        """Half-open ``[start, end)`` of the calendar week containing *now*."""
        today = self.day_of(now)
        offset = (today.weekday() - self.week_start.python_weekday) % 7
        first_day = today - timedelta(days=offset)
        start = self.start_of_day(first_day)
        end = self.start_of_day(first_day + timedelta(days=7))
        return start, end

    def is_in_same_week(self, dt: datetime, now: datetime) -> bool:
        start, end = self.week_bounds(now)
        return start <= self.localize(dt) < end

    # ---- Labels -----------------------------------------------------------

    def weekday_name(self, dt: datetime) -> str:
        return WEEKDAY_NAMES[self.day_of(dt).weekday()]

    def time_of_day(self, dt: datetime) -> TimeOfDay:
        return TimeOfDay.from_hour(self.localize(dt).hour)

    def season(self, dt: datetime) -> Season:
        return Season.from_month(self.localize(dt).month)

    def is_workday(self, dt: datetime) -> bool:
        return self.day_of(dt).weekday() < 5

    def ordered_weekday_names(self) -> list[str]:
        """Weekday names starting from the preferred first day."""
        start = self.week_start.python_weekday
        return list(WEEKDAY_NAMES[start:] + WEEKDAY_NAMES[:start])


@lru_cache
def get_calendar_context() -> CalendarContext:
    settings = get_settings()
    return CalendarContext.from_names(settings.timezone, settings.week_start)

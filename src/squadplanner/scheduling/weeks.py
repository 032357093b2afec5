"""Week arithmetic anchored to the organisation's reference timezone.

"Today" is the calendar day in the organisation timezone, not the server's
local day, so every user sees the same week boundaries. All values are plain
dates; nothing here carries a time of day.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo

DAY_NAMES: list[str] = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


def reference_today(org_tz: tzinfo, now: datetime | None = None) -> date:
    """The current calendar day in `org_tz` at instant `now` (default: now)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(org_tz).date()


def monday_of(day: date) -> date:
    """Most recent Monday on or before `day` (a Sunday steps back six days)."""
    return day - timedelta(days=day.weekday())


def current_monday(org_tz: tzinfo, now: datetime | None = None) -> date:
    return monday_of(reference_today(org_tz, now))


def week_monday(offset: int, org_tz: tzinfo, now: datetime | None = None) -> date:
    """Monday of the week `offset` weeks away from the current one."""
    return current_monday(org_tz, now) + timedelta(days=7 * offset)


def week_dates(monday: date) -> list[date]:
    """The seven consecutive dates Monday..Sunday starting at `monday`."""
    return [monday + timedelta(days=i) for i in range(7)]


def week_end(monday: date) -> date:
    return monday + timedelta(days=6)


def week_offset(week_start: date, current: date) -> int:
    """Whole weeks between `current` Monday and `week_start` Monday."""
    return (week_start - current).days // 7


def is_monday(day: date) -> bool:
    return day.weekday() == 0


def format_week_range(monday: date) -> str:
    """Human label for a week, e.g. "Jun 3 - Jun 9, 2024"."""
    sunday = week_end(monday)
    return f"{monday:%b} {monday.day} - {sunday:%b} {sunday.day}, {sunday.year}"

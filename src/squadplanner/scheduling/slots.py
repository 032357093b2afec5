"""Hourly time-slot labels for the schedule grid.

Slots are keyed by their organisation-local hour (0-23). The grid uses a
fixed, ordered window of consecutive hours; activities store the label form
(e.g. "3:00 PM") and availability maps store the hour.
"""

import re

_LABEL_RE = re.compile(r"^\s*(\d{1,2}):00\s*(AM|PM)\s*$", re.IGNORECASE)


def format_hour(hour: int) -> str:
    """Format an hour (0-23) as a slot label, e.g. 15 -> "3:00 PM"."""
    hour %= 24
    if hour == 0:
        return "12:00 AM"
    if hour == 12:
        return "12:00 PM"
    if hour < 12:
        return f"{hour}:00 AM"
    return f"{hour - 12}:00 PM"


def format_hour_short(hour: int) -> str:
    hour %= 24
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour < 12:
        return f"{hour} AM"
    return f"{hour - 12} PM"


def format_hour_range(hour: int) -> str:
    """Format the one-hour span starting at `hour`, e.g. "3 PM - 4 PM"."""
    return f"{format_hour_short(hour)} - {format_hour_short(hour + 1)}"


def parse_slot_label(label: str) -> int:
    """Parse a slot label back to its hour (0-23).

    Raises ValueError if the label is not of the form "H:00 AM|PM".
    """
    match = _LABEL_RE.match(label)
    if match is None:
        raise ValueError(f"Invalid time slot label: {label!r}")
    hour = int(match.group(1))
    if not 1 <= hour <= 12:
        raise ValueError(f"Invalid time slot label: {label!r}")
    period = match.group(2).upper()
    if period == "AM":
        return 0 if hour == 12 else hour
    return 12 if hour == 12 else hour + 12


def org_slots(first_hour: int, count: int) -> list[int]:
    """Ordered organisation-local hours making up the grid window."""
    if not 0 <= first_hour <= 23 or count < 1 or first_hour + count > 24:
        raise ValueError(f"Slot window {first_hour}+{count} does not fit in one day")
    return list(range(first_hour, first_hour + count))


def slot_labels(first_hour: int, count: int) -> list[str]:
    return [format_hour(h) for h in org_slots(first_hour, count)]

"""Conversion between the organisation timezone and viewer UTC offsets.

Activities are always stored against organisation-local slots. A viewer's
profile carries a fixed offset label ("UTC+2"); conversion only changes what
is printed, never which slot an activity occupies. Conversion goes through a
full instant (date + hour), so an offset that crosses midnight moves the
displayed date as well as the hour.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from squadplanner.scheduling.slots import format_hour

_OFFSET_RE = re.compile(r"^UTC([+-])(\d{1,2})(?::(\d{2}))?$")

SHORT_NAMES: dict[str, str] = {
    "UTC+0": "GMT",
    "UTC+1": "CET",
    "UTC+2": "EET",
    "UTC+3": "MSK",
}


@dataclass(frozen=True)
class ViewerTimezone:
    """A fixed UTC offset attached to a user profile."""

    label: str
    offset: timedelta

    @property
    def tzinfo(self) -> timezone:
        return timezone(self.offset)

    @property
    def short_name(self) -> str:
        return SHORT_NAMES.get(self.label, self.label)


@dataclass(frozen=True)
class DisplaySlot:
    """An organisation slot as seen from a viewer's offset."""

    date: date
    hour: int
    label: str
    day_shift: int  # -1, 0 or +1 relative to the organisation date


def parse_viewer_timezone(label: str) -> ViewerTimezone:
    """Parse "UTC+1", "UTC-5" or "UTC+5:30" into a ViewerTimezone.

    Raises ValueError on malformed labels or offsets outside -12..+14 hours.
    """
    match = _OFFSET_RE.match(label.strip())
    if match is None:
        raise ValueError(f"Invalid timezone label: {label!r}")
    sign, hours, minutes = match.group(1), int(match.group(2)), int(match.group(3) or 0)
    if minutes >= 60:
        raise ValueError(f"Invalid timezone label: {label!r}")
    offset = timedelta(hours=hours, minutes=minutes)
    if sign == "-":
        offset = -offset
    if not timedelta(hours=-12) <= offset <= timedelta(hours=14):
        raise ValueError(f"Timezone offset out of range: {label!r}")
    canonical = f"UTC{sign if offset else '+'}{hours}" + (f":{minutes:02d}" if minutes else "")
    return ViewerTimezone(label=canonical, offset=offset)


def resolve_org_timezone(name: str) -> tzinfo:
    """Resolve the organisation timezone: an IANA name or a "UTC±H" label."""
    if name.upper().startswith("UTC") and name.upper() != "UTC":
        return parse_viewer_timezone(name.upper()).tzinfo
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name!r}") from e


def to_viewer(day: date, hour: int, viewer: ViewerTimezone, org_tz: tzinfo) -> DisplaySlot:
    """Convert an organisation-local (date, hour) into the viewer's offset."""
    instant = datetime.combine(day, time(hour), tzinfo=org_tz)
    local = instant.astimezone(viewer.tzinfo)
    return DisplaySlot(
        date=local.date(),
        hour=local.hour,
        label=_label(local),
        day_shift=(local.date() - day).days,
    )


def to_org(day: date, hour: int, viewer: ViewerTimezone, org_tz: tzinfo) -> tuple[date, int]:
    """Inverse of to_viewer: map a viewer-local (date, hour) to the organisation."""
    instant = datetime.combine(day, time(hour), tzinfo=viewer.tzinfo)
    org = instant.astimezone(org_tz)
    return org.date(), org.hour


def hour_offset(viewer: ViewerTimezone, org_tz: tzinfo, on_day: date) -> float:
    """Hours the viewer is ahead (+) or behind (-) the organisation on `on_day`."""
    noon = datetime.combine(on_day, time(12), tzinfo=org_tz)
    org_offset = noon.utcoffset() or timedelta(0)
    return (viewer.offset - org_offset).total_seconds() / 3600


def _label(moment: datetime) -> str:
    if moment.minute:
        base = format_hour(moment.hour)
        return base.replace(":00", f":{moment.minute:02d}")
    return format_hour(moment.hour)

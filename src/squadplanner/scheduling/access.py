"""Which weeks each role may open and edit."""

from dataclasses import dataclass
from datetime import date, timedelta

STAFF_ROLES = ("admin", "manager")


@dataclass(frozen=True)
class WeekAccess:
    viewable: bool
    read_only: bool
    can_go_prev: bool
    can_go_next: bool


def is_staff(role: str) -> bool:
    return role in STAFF_ROLES


def is_week_accessible_for_player(
    week_start: date, current: date, weeks_ahead: int = 3
) -> bool:
    """Current week plus `weeks_ahead` future weeks, both ends inclusive."""
    last = current + timedelta(days=7 * weeks_ahead)
    return current <= week_start <= last


def is_week_in_past(week_start: date, current: date) -> bool:
    return week_start < current


def availability_access(
    role: str, week_start: date, current: date, weeks_ahead: int = 3
) -> WeekAccess:
    """Access flags for the availability form of the week `week_start`.

    Players can still open a past week, read-only, to see what they
    submitted; weeks beyond the window are closed to them.
    """
    if is_staff(role):
        return WeekAccess(viewable=True, read_only=False, can_go_prev=True, can_go_next=True)

    prev_week = week_start - timedelta(days=7)
    next_week = week_start + timedelta(days=7)
    in_past = is_week_in_past(week_start, current)
    return WeekAccess(
        viewable=in_past or is_week_accessible_for_player(week_start, current, weeks_ahead),
        read_only=in_past,
        can_go_prev=is_week_accessible_for_player(prev_week, current, weeks_ahead),
        can_go_next=is_week_accessible_for_player(next_week, current, weeks_ahead),
    )


def schedule_access(role: str, offset: int, max_offset: int = 2) -> WeekAccess:
    """Access flags for the team schedule at week `offset` (0 = current week)."""
    if is_staff(role):
        return WeekAccess(viewable=True, read_only=False, can_go_prev=True, can_go_next=True)
    return WeekAccess(
        viewable=0 <= offset <= max_offset,
        read_only=True,
        can_go_prev=0 < offset <= max_offset,
        can_go_next=0 <= offset < max_offset,
    )

"""Resolve schedule activities into the cells of a displayed week."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from squadplanner.models.schedule import ScheduleActivity
from squadplanner.scheduling.weeks import week_dates


@dataclass
class GridCell:
    day_of_week: int  # 0=Monday
    date: date
    time_slot: str  # organisation-local label
    activity: ScheduleActivity | None = None


def activity_matches(
    activity: ScheduleActivity, day_of_week: int, time_slot: str, cell_date: date
) -> bool:
    """Whether `activity` belongs in the cell (day_of_week, time_slot, cell_date).

    A dated activity only matches its own date; an undated one recurs on its
    day of week in every displayed week.
    """
    if activity.time_slot != time_slot:
        return False
    if activity.activity_date is not None:
        return activity.activity_date == cell_date
    return activity.day_of_week == day_of_week


def resolve_cell(
    activities: Sequence[ScheduleActivity],
    day_of_week: int,
    time_slot: str,
    cell_date: date,
) -> ScheduleActivity | None:
    """First activity matching the cell, or None."""
    for activity in activities:
        if activity_matches(activity, day_of_week, time_slot, cell_date):
            return activity
    return None


def build_week_grid(
    activities: Sequence[ScheduleActivity],
    monday: date,
    time_slots: Sequence[str],
) -> list[GridCell]:
    """All cells of the week starting `monday`, slot-major then day order."""
    dates = week_dates(monday)
    cells = []
    for slot in time_slots:
        for day_index, cell_date in enumerate(dates):
            cells.append(
                GridCell(
                    day_of_week=day_index,
                    date=cell_date,
                    time_slot=slot,
                    activity=resolve_cell(activities, day_index, slot, cell_date),
                )
            )
    return cells

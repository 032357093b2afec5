"""Team schedule endpoints: activity authoring, the weekly grid and RSVPs."""

import logging
from datetime import date, datetime, tzinfo

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from squadplanner.api.deps import (
    get_current_user,
    get_display_timezone,
    get_now,
    get_org_timezone,
    get_slot_hours,
    require_team_member,
    require_team_staff,
)
from squadplanner.config import Settings, get_settings
from squadplanner.database import get_db
from squadplanner.models.schedule import ActivityResponse, ScheduleActivity
from squadplanner.models.user import User
from squadplanner.scheduling.access import WeekAccess, schedule_access
from squadplanner.scheduling.resolver import GridCell, build_week_grid, resolve_cell
from squadplanner.scheduling.slots import format_hour, parse_slot_label, slot_labels
from squadplanner.scheduling.timezones import (
    ViewerTimezone,
    hour_offset,
    parse_viewer_timezone,
    to_org,
    to_viewer,
)
from squadplanner.scheduling.weeks import (
    DAY_NAMES,
    current_monday,
    format_week_range,
    monday_of,
    week_dates,
    week_end,
    week_monday,
    week_offset,
)
from squadplanner.schemas.schedule import (
    ActivityResponseCreate,
    ActivityResponseList,
    ActivityResponseRead,
    GridCellRead,
    ScheduleActivityCreate,
    ScheduleActivityRead,
    ScheduleActivityUpdate,
    TimeSlotRead,
    WeekAccessRead,
    WeekScheduleRead,
)

router = APIRouter(prefix="/api/schedule", tags=["schedule"])
logger = logging.getLogger(__name__)

# Ten years either way; keeps date arithmetic well inside date.min..date.max
MAX_WEEK_OFFSET = 520


def _check_slot_in_window(time_slot: str, hours: list[int]) -> None:
    if parse_slot_label(time_slot) not in hours:
        window = f"{format_hour(hours[0])} - {format_hour(hours[-1])}"
        raise HTTPException(
            status_code=422, detail=f"time_slot must fall within the schedule window ({window})"
        )


async def _get_activity(session: AsyncSession, activity_id: int) -> ScheduleActivity:
    result = await session.execute(
        select(ScheduleActivity).where(ScheduleActivity.id == activity_id)
    )
    activity = result.scalar_one_or_none()
    if activity is None:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


async def _team_activities(session: AsyncSession, team_id: int) -> list[ScheduleActivity]:
    # Dated one-offs first so they win over the weekly template in the grid
    stmt = (
        select(ScheduleActivity)
        .where(ScheduleActivity.team_id == team_id)
        .order_by(
            ScheduleActivity.activity_date.is_(None),
            ScheduleActivity.day_of_week,
            ScheduleActivity.id,
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/activities", response_model=list[ScheduleActivityRead])
async def list_activities(
    team_id: int = Query(),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[ScheduleActivity]:
    """Every activity of a team, recurring and dated, in one flat list."""
    require_team_member(user, team_id)
    return await _team_activities(session, team_id)


@router.post("/activities", response_model=ScheduleActivityRead, status_code=201)
async def create_activity(
    body: ScheduleActivityCreate,
    user: User = Depends(get_current_user),
    hours: list[int] = Depends(get_slot_hours),
    session: AsyncSession = Depends(get_db),
) -> ScheduleActivity:
    """Add an activity. A given activity_date makes it a one-off that overrides
    the weekly template for that date only."""
    require_team_staff(user, body.team_id)
    _check_slot_in_window(body.time_slot, hours)

    activity = ScheduleActivity(
        team_id=body.team_id,
        type=body.type,
        title=body.title,
        description=body.description,
        day_of_week=body.day_of_week,
        activity_date=body.activity_date,
        time_slot=body.time_slot,
        duration=body.duration,
        created_by=user.id,
    )
    session.add(activity)
    await session.commit()
    await session.refresh(activity)
    logger.info(
        "Activity %s created for team %s (%s %s)",
        activity.id,
        activity.team_id,
        activity.activity_date or DAY_NAMES[activity.day_of_week],
        activity.time_slot,
    )
    return activity


@router.put("/activities/{activity_id}", response_model=ScheduleActivityRead)
async def update_activity(
    activity_id: int,
    body: ScheduleActivityUpdate,
    user: User = Depends(get_current_user),
    hours: list[int] = Depends(get_slot_hours),
    session: AsyncSession = Depends(get_db),
) -> ScheduleActivity:
    activity = await _get_activity(session, activity_id)
    require_team_staff(user, activity.team_id)
    _check_slot_in_window(body.time_slot, hours)

    for field, value in body.model_dump().items():
        setattr(activity, field, value)
    activity.updated_at = datetime.utcnow()

    await session.commit()
    await session.refresh(activity)
    return activity


@router.delete("/activities/{activity_id}", status_code=204)
async def delete_activity(
    activity_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> None:
    activity = await _get_activity(session, activity_id)
    require_team_staff(user, activity.team_id)

    await session.execute(
        delete(ActivityResponse).where(ActivityResponse.activity_id == activity_id)
    )
    await session.delete(activity)
    await session.commit()
    logger.info("Activity %s deleted from team %s", activity_id, activity.team_id)


def _display_cell(
    cell: GridCell, viewer: ViewerTimezone, display_tz: tzinfo
) -> GridCellRead:
    shown = to_viewer(cell.date, parse_slot_label(cell.time_slot), viewer, display_tz)
    return GridCellRead(
        day_of_week=cell.day_of_week,
        day=DAY_NAMES[cell.day_of_week],
        date=cell.date,
        time_slot=cell.time_slot,
        display_date=shown.date,
        display_time=shown.label,
        day_shift=shown.day_shift,
        activity=ScheduleActivityRead.model_validate(cell.activity) if cell.activity else None,
    )


def _check_schedule_access(user: User, week_offset: int, settings: Settings) -> WeekAccess:
    access = schedule_access(user.role, week_offset, settings.schedule_max_week_offset)
    if not access.viewable:
        raise HTTPException(
            status_code=403,
            detail=f"Players can view the schedule up to {settings.schedule_max_week_offset} weeks ahead",
        )
    return access


@router.get("/week", response_model=WeekScheduleRead)
async def get_week_schedule(
    team_id: int = Query(),
    week_offset: int = Query(default=0, ge=-MAX_WEEK_OFFSET, le=MAX_WEEK_OFFSET),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    org_tz: tzinfo = Depends(get_org_timezone),
    display_tz: tzinfo = Depends(get_display_timezone),
    hours: list[int] = Depends(get_slot_hours),
    now: datetime = Depends(get_now),
    session: AsyncSession = Depends(get_db),
) -> WeekScheduleRead:
    """The team's week at `week_offset`, resolved cell by cell.

    Each cell carries its organisation slot (the key activities are matched
    on) plus the time and date it falls on in the caller's timezone.
    """
    require_team_member(user, team_id)
    access = _check_schedule_access(user, week_offset, settings)

    viewer = parse_viewer_timezone(user.timezone)
    monday = week_monday(week_offset, org_tz, now)
    activities = await _team_activities(session, team_id)
    labels = slot_labels(settings.slot_first_hour, settings.slot_count)

    return WeekScheduleRead(
        team_id=team_id,
        week_offset=week_offset,
        week_start=monday,
        week_end=week_end(monday),
        label=format_week_range(monday),
        dates=week_dates(monday),
        org_timezone=settings.org_timezone,
        org_display_offset=settings.org_display_offset,
        viewer_timezone=viewer.label,
        viewer_timezone_short=viewer.short_name,
        viewer_offset_hours=hour_offset(viewer, display_tz, monday),
        time_slots=[
            TimeSlotRead(org=format_hour(h), display=to_viewer(monday, h, viewer, display_tz).label)
            for h in hours
        ],
        access=WeekAccessRead.model_validate(access),
        cells=[
            _display_cell(cell, viewer, display_tz)
            for cell in build_week_grid(activities, monday, labels)
        ],
    )


@router.get("/cell", response_model=GridCellRead)
async def get_cell_at_local_time(
    team_id: int = Query(),
    day: date = Query(),
    time_slot: str = Query(),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    org_tz: tzinfo = Depends(get_org_timezone),
    display_tz: tzinfo = Depends(get_display_timezone),
    hours: list[int] = Depends(get_slot_hours),
    now: datetime = Depends(get_now),
    session: AsyncSession = Depends(get_db),
) -> GridCellRead:
    """What is on at `day` / `time_slot` as read on the caller's own clock.

    The local time is mapped back to the organisation slot it falls in, then
    resolved like any grid cell.
    """
    require_team_member(user, team_id)
    viewer = parse_viewer_timezone(user.timezone)
    try:
        org_date, org_hour = to_org(day, parse_slot_label(time_slot), viewer, display_tz)
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    if org_hour not in hours:
        raise HTTPException(status_code=404, detail="No schedule slot at that time")

    offset = week_offset(monday_of(org_date), current_monday(org_tz, now))
    _check_schedule_access(user, offset, settings)

    activities = await _team_activities(session, team_id)
    slot = format_hour(org_hour)
    cell = GridCell(
        day_of_week=org_date.weekday(),
        date=org_date,
        time_slot=slot,
        activity=resolve_cell(activities, org_date.weekday(), slot, org_date),
    )
    return _display_cell(cell, viewer, display_tz)


@router.get("/responses", response_model=ActivityResponseList)
async def list_responses(
    activity_id: int = Query(),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ActivityResponseList:
    """Player RSVPs for one activity, with per-status totals."""
    activity = await _get_activity(session, activity_id)
    require_team_member(user, activity.team_id)

    result = await session.execute(
        select(ActivityResponse)
        .where(ActivityResponse.activity_id == activity_id)
        .order_by(ActivityResponse.id)
    )
    responses = list(result.scalars().all())
    return ActivityResponseList(
        responses=[ActivityResponseRead.model_validate(r) for r in responses],
        available_count=sum(1 for r in responses if r.status == "available"),
        unavailable_count=sum(1 for r in responses if r.status == "unavailable"),
        maybe_count=sum(1 for r in responses if r.status == "maybe"),
    )


@router.post("/responses", response_model=ActivityResponseRead)
async def respond_to_activity(
    body: ActivityResponseCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ActivityResponse:
    """Record the caller's RSVP. Replaces any earlier answer for the activity."""
    activity = await _get_activity(session, body.activity_id)
    require_team_member(user, activity.team_id)

    stmt = select(ActivityResponse).where(
        ActivityResponse.activity_id == body.activity_id,
        ActivityResponse.player_id == user.id,
    )
    response = (await session.execute(stmt)).scalar_one_or_none()
    if response is None:
        response = ActivityResponse(activity_id=body.activity_id, player_id=user.id)
        session.add(response)
    response.status = body.status
    response.notes = body.notes
    response.updated_at = datetime.utcnow()

    try:
        await session.commit()
    except IntegrityError:
        # A concurrent first answer won the insert; apply ours on top of it.
        await session.rollback()
        response = (await session.execute(stmt)).scalar_one()
        response.status = body.status
        response.notes = body.notes
        await session.commit()
    await session.refresh(response)
    return response


@router.delete("/responses/{response_id}", status_code=204)
async def delete_response(
    response_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> None:
    """Withdraw an RSVP. Players may only withdraw their own."""
    result = await session.execute(
        select(ActivityResponse).where(ActivityResponse.id == response_id)
    )
    response = result.scalar_one_or_none()
    if response is None:
        raise HTTPException(status_code=404, detail="Response not found")
    if response.player_id != user.id:
        activity = await _get_activity(session, response.activity_id)
        require_team_staff(user, activity.team_id)

    await session.delete(response)
    await session.commit()

"""Availability API routes: players' weekly hour-by-hour availability."""

import logging
from datetime import date, datetime, timedelta, tzinfo

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from squadplanner.api.deps import (
    get_current_user,
    get_now,
    get_org_timezone,
    get_slot_hours,
    require_team_member,
    require_team_staff,
)
from squadplanner.config import Settings, get_settings
from squadplanner.database import get_db
from squadplanner.models.availability import PlayerWeeklyAvailability
from squadplanner.models.user import User
from squadplanner.scheduling.access import WeekAccess, availability_access, is_staff
from squadplanner.scheduling.availability import (
    AvailabilityGrid,
    build_heatmap,
    quick_fill,
)
from squadplanner.scheduling.slots import format_hour, format_hour_range
from squadplanner.scheduling.weeks import current_monday, is_monday, week_end
from squadplanner.schemas.availability import (
    AvailabilityHeatmapRead,
    HeatmapCellRead,
    PlayerAvailabilityRead,
    PlayerAvailabilitySave,
    QuickFillRead,
)
from squadplanner.schemas.schedule import WeekAccessRead

router = APIRouter(prefix="/api/availability", tags=["availability"])
logger = logging.getLogger(__name__)

NO_SLOTS_MESSAGE = "Please select at least one time slot when you are available"
SAVE_FAILED_MESSAGE = "Failed to save your availability. Please try again."

# Leaves room for the neighbouring weeks the access flags look at
FIRST_WEEK = date.min + timedelta(days=7)
LAST_WEEK = date.max - timedelta(days=13)


def _require_monday(week_start: date) -> None:
    if not is_monday(week_start):
        raise HTTPException(status_code=422, detail="week_start must be a Monday")
    if not FIRST_WEEK <= week_start <= LAST_WEEK:
        raise HTTPException(status_code=422, detail="week_start is out of range")


async def _resolve_player(
    session: AsyncSession, user: User, team_id: int, player_id: int | None
) -> int:
    """The player a request is about: the caller, or (staff only) someone on the team."""
    if player_id is None or player_id == user.id:
        return user.id
    require_team_staff(user, team_id)
    result = await session.execute(
        select(User).where(User.id == player_id, User.team_id == team_id)
    )
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Player not found in this team")
    return player_id


def _week_access(
    user: User, week_start: date, settings: Settings, org_tz: tzinfo, now: datetime
) -> WeekAccess:
    current = current_monday(org_tz, now)
    access = availability_access(user.role, week_start, current, settings.player_weeks_ahead)
    if not access.viewable:
        raise HTTPException(
            status_code=403,
            detail=(
                "You can fill availability for the current week and up to "
                f"{settings.player_weeks_ahead} weeks ahead"
            ),
        )
    return access


async def _find_record(
    session: AsyncSession, player_id: int, team_id: int, week_start: date
) -> PlayerWeeklyAvailability | None:
    stmt = select(PlayerWeeklyAvailability).where(
        PlayerWeeklyAvailability.player_id == player_id,
        PlayerWeeklyAvailability.team_id == team_id,
        PlayerWeeklyAvailability.week_start == week_start,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


@router.get("", response_model=PlayerAvailabilityRead)
async def get_availability(
    team_id: int = Query(),
    week_start: date = Query(),
    player_id: int | None = Query(default=None),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    org_tz: tzinfo = Depends(get_org_timezone),
    hours: list[int] = Depends(get_slot_hours),
    now: datetime = Depends(get_now),
    session: AsyncSession = Depends(get_db),
) -> PlayerAvailabilityRead:
    """Load one week of availability.

    A week with nothing submitted yet comes back as a blank form, not a 404.
    Past weeks are returned read-only so players can still see what they sent.
    """
    _require_monday(week_start)
    require_team_member(user, team_id)
    target = await _resolve_player(session, user, team_id, player_id)
    access = _week_access(user, week_start, settings, org_tz, now)

    record = await _find_record(session, target, team_id, week_start)
    if record is None:
        return PlayerAvailabilityRead(
            player_id=target,
            team_id=team_id,
            week_start=week_start,
            week_end=week_end(week_start),
            time_slots=AvailabilityGrid(hours).to_time_slots(),
            access=WeekAccessRead.model_validate(access),
        )

    return PlayerAvailabilityRead(
        id=record.id,
        player_id=record.player_id,
        team_id=record.team_id,
        week_start=record.week_start,
        week_end=record.week_end,
        time_slots=AvailabilityGrid.from_json(record.time_slots, hours).to_time_slots(),
        notes=record.notes,
        submitted_at=record.submitted_at,
        access=WeekAccessRead.model_validate(access),
    )


@router.post("", response_model=PlayerAvailabilityRead)
async def save_availability(
    body: PlayerAvailabilitySave,
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    org_tz: tzinfo = Depends(get_org_timezone),
    hours: list[int] = Depends(get_slot_hours),
    now: datetime = Depends(get_now),
    session: AsyncSession = Depends(get_db),
) -> PlayerAvailabilityRead:
    """Save one week of availability, replacing any earlier submission for
    the same (player, team, week)."""
    _require_monday(body.week_start)
    require_team_member(user, body.team_id)
    target = await _resolve_player(session, user, body.team_id, body.player_id)
    access = _week_access(user, body.week_start, settings, org_tz, now)
    if access.read_only:
        raise HTTPException(
            status_code=403, detail="This week is in the past and cannot be edited"
        )

    try:
        grid = AvailabilityGrid.from_time_slots(body.time_slots, hours)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    if not grid.has_any():
        raise HTTPException(status_code=422, detail=NO_SLOTS_MESSAGE)

    try:
        record = await _upsert(session, target, body, grid)
    except SQLAlchemyError:
        await session.rollback()
        logger.exception(
            "Saving availability failed (player=%s team=%s week=%s)",
            target,
            body.team_id,
            body.week_start,
        )
        raise HTTPException(status_code=500, detail=SAVE_FAILED_MESSAGE) from None

    logger.info(
        "Availability saved: player=%s team=%s week=%s slots=%d",
        target,
        body.team_id,
        body.week_start,
        grid.count(),
    )
    return PlayerAvailabilityRead(
        id=record.id,
        player_id=record.player_id,
        team_id=record.team_id,
        week_start=record.week_start,
        week_end=record.week_end,
        time_slots=grid.to_time_slots(),
        notes=record.notes,
        submitted_at=record.submitted_at,
        access=WeekAccessRead.model_validate(access),
    )


async def _upsert(
    session: AsyncSession,
    player_id: int,
    body: PlayerAvailabilitySave,
    grid: AvailabilityGrid,
) -> PlayerWeeklyAvailability:
    record = await _find_record(session, player_id, body.team_id, body.week_start)
    now = datetime.utcnow()
    if record is None:
        record = PlayerWeeklyAvailability(
            player_id=player_id,
            team_id=body.team_id,
            week_start=body.week_start,
            week_end=week_end(body.week_start),
        )
        session.add(record)
    record.time_slots = grid.to_json()
    record.notes = body.notes
    record.submitted_at = now
    record.updated_at = now

    try:
        await session.commit()
    except IntegrityError:
        # Lost a race on the first insert for this week; update the winner instead.
        await session.rollback()
        record = await _find_record(session, player_id, body.team_id, body.week_start)
        if record is None:
            raise
        record.time_slots = grid.to_json()
        record.notes = body.notes
        record.submitted_at = now
        await session.commit()
    await session.refresh(record)
    return record


@router.get("/heatmap", response_model=AvailabilityHeatmapRead)
async def get_team_heatmap(
    team_id: int = Query(),
    week_start: date = Query(),
    user: User = Depends(get_current_user),
    hours: list[int] = Depends(get_slot_hours),
    session: AsyncSession = Depends(get_db),
) -> AvailabilityHeatmapRead:
    """How many players are free in each slot of a week. Staff only."""
    _require_monday(week_start)
    require_team_staff(user, team_id)

    stmt = (
        select(PlayerWeeklyAvailability, User.username)
        .join(User, User.id == PlayerWeeklyAvailability.player_id)
        .where(
            PlayerWeeklyAvailability.team_id == team_id,
            PlayerWeeklyAvailability.week_start == week_start,
        )
        .order_by(User.username)
    )
    rows = (await session.execute(stmt)).all()
    submissions = [
        (username, AvailabilityGrid.from_json(record.time_slots, hours)) for record, username in rows
    ]

    return AvailabilityHeatmapRead(
        team_id=team_id,
        week_start=week_start,
        week_end=week_end(week_start),
        submissions=len(submissions),
        cells=[
            HeatmapCellRead(
                day=cell.day,
                hour=cell.hour,
                label=format_hour(cell.hour),
                span=format_hour_range(cell.hour),
                count=cell.count,
                players=cell.players,
            )
            for cell in build_heatmap(submissions, hours)
        ],
    )


@router.get("/quick-fill/{preset}", response_model=QuickFillRead)
async def get_quick_fill(
    preset: str,
    user: User = Depends(get_current_user),
    hours: list[int] = Depends(get_slot_hours),
) -> QuickFillRead:
    """A pre-filled week: all, clear, evenings, weekends or weekdays."""
    try:
        grid = quick_fill(preset, hours)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return QuickFillRead(preset=preset, time_slots=grid.to_time_slots())


@router.delete("/{availability_id}", status_code=204)
async def delete_availability(
    availability_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> None:
    """Remove a submission. Managers and admins only."""
    if not is_staff(user.role):
        raise HTTPException(status_code=403, detail="Only managers and admins can do this")
    result = await session.execute(
        select(PlayerWeeklyAvailability).where(PlayerWeeklyAvailability.id == availability_id)
    )
    record = result.scalar_one_or_none()
    if record is None:
        raise HTTPException(status_code=404, detail="Availability not found")
    require_team_staff(user, record.team_id)

    await session.delete(record)
    await session.commit()

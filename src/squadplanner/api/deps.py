"""Shared FastAPI dependencies: identity, clock and calendar settings."""

from datetime import datetime, timezone, tzinfo

from fastapi import Depends, Header, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from squadplanner.config import Settings, get_settings
from squadplanner.database import get_db
from squadplanner.models.user import User
from squadplanner.scheduling.access import is_staff
from squadplanner.scheduling.slots import org_slots
from squadplanner.scheduling.timezones import resolve_org_timezone


async def get_current_user(
    x_user_id: int | None = Header(default=None),
    session: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the caller from the X-User-Id header.

    Session handling lives in front of this service; it forwards the
    authenticated profile id.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    result = await session.execute(select(User).where(User.id == x_user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_org_timezone(settings: Settings = Depends(get_settings)) -> tzinfo:
    return resolve_org_timezone(settings.org_timezone)


def get_display_timezone(settings: Settings = Depends(get_settings)) -> tzinfo:
    """Fixed offset (no summer time) the organisation's slot labels are written in."""
    return resolve_org_timezone(settings.org_display_offset)


def get_slot_hours(settings: Settings = Depends(get_settings)) -> list[int]:
    return org_slots(settings.slot_first_hour, settings.slot_count)


def require_team_member(user: User, team_id: int) -> None:
    """Admins see every team; everyone else only their own."""
    if user.role != "admin" and user.team_id != team_id:
        raise HTTPException(status_code=403, detail="Access denied")


def require_team_staff(user: User, team_id: int) -> None:
    require_team_member(user, team_id)
    if not is_staff(user.role):
        raise HTTPException(status_code=403, detail="Only managers and admins can do this")

"""User profile endpoints: bootstrap, current profile and display timezone."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from squadplanner.api.deps import get_current_user
from squadplanner.config import Settings, get_settings
from squadplanner.database import get_db
from squadplanner.models.team import Team
from squadplanner.models.user import User
from squadplanner.schemas.user import TimezoneUpdate, UserCreate, UserRead

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("", response_model=UserRead, status_code=201)
async def create_user(
    body: UserCreate,
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(get_db),
) -> User:
    """Register a profile. Account provisioning happens upstream; this only
    records the role, team and timezone the schedule needs."""
    existing = await session.execute(
        select(User).where(or_(User.username == body.username, User.email == body.email))
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Username or email already registered")

    if body.team_id is not None:
        team = await session.execute(select(Team).where(Team.id == body.team_id))
        if team.scalar_one_or_none() is None:
            raise HTTPException(status_code=404, detail="Team not found")

    user = User(
        **body.model_dump(exclude={"timezone"}),
        timezone=body.timezone or settings.default_viewer_timezone,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info("Registered %s %s (team=%s)", user.role, user.username, user.team_id)
    return user


@router.get("/me", response_model=UserRead)
async def get_me(user: User = Depends(get_current_user)) -> User:
    return user


@router.patch("/me/timezone", response_model=UserRead)
async def update_my_timezone(
    body: TimezoneUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> User:
    """Change the offset schedule times are displayed in. Stored data is untouched."""
    user.timezone = body.timezone
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user

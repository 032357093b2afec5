"""Team endpoints: the minimal registry schedules and availability hang off."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from squadplanner.api.deps import get_current_user, require_team_member
from squadplanner.database import get_db
from squadplanner.models.team import Team
from squadplanner.models.user import User
from squadplanner.schemas.team import TeamCreate, TeamRead

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.post("", response_model=TeamRead, status_code=201)
async def create_team(
    body: TeamCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> Team:
    """Create a team. Admin only; names are unique."""
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Only admins can create teams")

    existing = await session.execute(select(Team).where(Team.name == body.name))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail=f"Team '{body.name}' already exists")

    team = Team(name=body.name, tag=body.tag, game=body.game)
    session.add(team)
    await session.commit()
    await session.refresh(team)
    return team


@router.get("", response_model=list[TeamRead])
async def list_teams(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[Team]:
    """Admins see every team, other users only their own."""
    stmt = select(Team).order_by(Team.name)
    if user.role != "admin":
        stmt = stmt.where(Team.id == user.team_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/{team_id}", response_model=TeamRead)
async def get_team(
    team_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> Team:
    require_team_member(user, team_id)
    result = await session.execute(select(Team).where(Team.id == team_id))
    team = result.scalar_one_or_none()
    if team is None:
        raise HTTPException(status_code=404, detail="Team not found")
    return team

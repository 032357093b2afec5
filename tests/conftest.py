from collections.abc import AsyncGenerator
from datetime import date, datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from squadplanner.api.deps import get_now
from squadplanner.database import Base, get_db
from squadplanner.main import app
from squadplanner.models.team import Team
from squadplanner.models.user import User

test_engine = create_async_engine("sqlite+aiosqlite://", echo=False)
test_session = async_sessionmaker(test_engine, expire_on_commit=False)

# Wednesday 2024-06-05, 10:00 UTC -> organisation (Europe/Paris) week starts Monday 2024-06-03
FIXED_NOW = datetime(2024, 6, 5, 10, 0, tzinfo=timezone.utc)
CURRENT_MONDAY = date(2024, 6, 3)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as session:
        yield session


def override_get_now() -> datetime:
    return FIXED_NOW


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_now] = override_get_now


@pytest.fixture(autouse=True)
async def setup_db() -> AsyncGenerator[None, None]:
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def seed_team(name: str = "21 Legends") -> Team:
    async with test_session() as session:
        team = Team(name=name, tag="21L", game="valorant")
        session.add(team)
        await session.commit()
        await session.refresh(team)
        return team


async def seed_user(
    username: str,
    role: str = "player",
    team_id: int | None = None,
    timezone_label: str = "UTC+1",
) -> User:
    async with test_session() as session:
        user = User(
            username=username,
            full_name=username.title(),
            email=f"{username}@example.com",
            role=role,
            team_id=team_id,
            timezone=timezone_label,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


def auth(user: User) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}

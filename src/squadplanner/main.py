import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import squadplanner.models  # noqa: F401  registers every model on Base.metadata
from squadplanner.api.routes.availability import router as availability_router
from squadplanner.api.routes.schedule import router as schedule_router
from squadplanner.api.routes.teams import router as teams_router
from squadplanner.api.routes.users import router as users_router
from squadplanner.config import get_settings
from squadplanner.database import Base, engine
from squadplanner.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create tables on startup (dev convenience; migrations for production)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="SquadPlanner",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(teams_router)
    app.include_router(users_router)
    app.include_router(schedule_router)
    app.include_router(availability_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> StatusResponse:
        return StatusResponse(status="ok")

    return app


app = create_app()

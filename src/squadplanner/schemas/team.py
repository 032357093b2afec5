from datetime import datetime

from pydantic import BaseModel, Field


class TeamBase(BaseModel):
    name: str = Field(max_length=100)
    tag: str | None = Field(default=None, max_length=10)
    game: str = Field(default="valorant", max_length=50)


class TeamCreate(TeamBase):
    pass


class TeamRead(TeamBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

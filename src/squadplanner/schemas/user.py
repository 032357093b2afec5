from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from squadplanner.scheduling.timezones import parse_viewer_timezone


def _canonical_timezone(value: str) -> str:
    return parse_viewer_timezone(value).label


class UserBase(BaseModel):
    username: str = Field(max_length=50)
    full_name: str = Field(max_length=100)
    email: EmailStr
    role: str = Field(default="player", pattern=r"^(admin|manager|player)$")
    team_id: int | None = None
    timezone: str = "UTC+1"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        return None if v is None else _canonical_timezone(v)


class UserCreate(UserBase):
    timezone: str | None = None  # falls back to the configured default


class TimezoneUpdate(BaseModel):
    timezone: str

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        return _canonical_timezone(v)


class UserRead(UserBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

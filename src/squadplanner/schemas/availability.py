from datetime import date, datetime

from pydantic import BaseModel, Field

from squadplanner.schemas.schedule import WeekAccessRead

DayName = str


class PlayerAvailabilitySave(BaseModel):
    team_id: int
    week_start: date
    player_id: int | None = None  # staff may save on a player's behalf
    time_slots: dict[DayName, dict[int, bool]] = Field(default_factory=dict)
    notes: str | None = Field(default=None, max_length=2000)


class PlayerAvailabilityRead(BaseModel):
    id: int | None = None  # None when nothing was submitted for the week yet
    player_id: int
    team_id: int
    week_start: date
    week_end: date
    time_slots: dict[DayName, dict[int, bool]]
    notes: str | None = None
    submitted_at: datetime | None = None
    access: WeekAccessRead


class HeatmapCellRead(BaseModel):
    day: DayName
    hour: int
    label: str
    span: str  # "3 PM - 4 PM"
    count: int
    players: list[str]


class AvailabilityHeatmapRead(BaseModel):
    team_id: int
    week_start: date
    week_end: date
    submissions: int
    cells: list[HeatmapCellRead]


class QuickFillRead(BaseModel):
    preset: str
    time_slots: dict[DayName, dict[int, bool]]

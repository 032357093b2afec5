from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from squadplanner.scheduling.slots import format_hour, parse_slot_label

ACTIVITY_TYPE_PATTERN = r"^(practice|individual_training|group_training|official_match|tournament|meeting)$"


class ScheduleActivityBase(BaseModel):
    type: str = Field(pattern=ACTIVITY_TYPE_PATTERN)
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    day_of_week: int | None = Field(default=None, ge=0, le=6)  # 0=Monday
    activity_date: date | None = None
    time_slot: str
    duration: int = Field(default=1, ge=1, le=24)  # hours

    @field_validator("time_slot")
    @classmethod
    def normalize_time_slot(cls, v: str) -> str:
        return format_hour(parse_slot_label(v))

    @model_validator(mode="after")
    def derive_day_of_week(self) -> "ScheduleActivityBase":
        if self.activity_date is not None:
            self.day_of_week = self.activity_date.weekday()
        elif self.day_of_week is None:
            raise ValueError("Either day_of_week or activity_date is required")
        return self


class ScheduleActivityCreate(ScheduleActivityBase):
    team_id: int


class ScheduleActivityUpdate(ScheduleActivityBase):
    pass


class ScheduleActivityRead(ScheduleActivityBase):
    id: int
    team_id: int
    day_of_week: int
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WeekAccessRead(BaseModel):
    viewable: bool
    read_only: bool
    can_go_prev: bool
    can_go_next: bool

    model_config = {"from_attributes": True}


class TimeSlotRead(BaseModel):
    org: str  # organisation-local label, the key activities are stored under
    display: str  # same slot in the viewer's timezone


class GridCellRead(BaseModel):
    day_of_week: int
    day: str
    date: date
    time_slot: str
    display_date: date
    display_time: str
    day_shift: int
    activity: ScheduleActivityRead | None = None


class WeekScheduleRead(BaseModel):
    team_id: int
    week_offset: int
    week_start: date
    week_end: date
    label: str
    dates: list[date]
    org_timezone: str
    org_display_offset: str
    viewer_timezone: str
    viewer_timezone_short: str
    viewer_offset_hours: float  # viewer minus organisation labels, e.g. -1.0
    time_slots: list[TimeSlotRead]
    access: WeekAccessRead
    cells: list[GridCellRead]


class ActivityResponseCreate(BaseModel):
    activity_id: int
    status: str = Field(pattern=r"^(available|unavailable|maybe)$")
    notes: str | None = None


class ActivityResponseRead(ActivityResponseCreate):
    id: int
    player_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActivityResponseList(BaseModel):
    responses: list[ActivityResponseRead]
    available_count: int
    unavailable_count: int
    maybe_count: int

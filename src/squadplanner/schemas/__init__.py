from squadplanner.schemas.availability import (
    AvailabilityHeatmapRead,
    HeatmapCellRead,
    PlayerAvailabilityRead,
    PlayerAvailabilitySave,
    QuickFillRead,
)
from squadplanner.schemas.schedule import (
    ActivityResponseCreate,
    ActivityResponseList,
    ActivityResponseRead,
    GridCellRead,
    ScheduleActivityCreate,
    ScheduleActivityRead,
    ScheduleActivityUpdate,
    TimeSlotRead,
    WeekAccessRead,
    WeekScheduleRead,
)
from squadplanner.schemas.system import StatusResponse
from squadplanner.schemas.team import TeamCreate, TeamRead
from squadplanner.schemas.user import TimezoneUpdate, UserCreate, UserRead

__all__ = [
    "ActivityResponseCreate",
    "ActivityResponseList",
    "ActivityResponseRead",
    "AvailabilityHeatmapRead",
    "GridCellRead",
    "HeatmapCellRead",
    "PlayerAvailabilityRead",
    "PlayerAvailabilitySave",
    "QuickFillRead",
    "ScheduleActivityCreate",
    "ScheduleActivityRead",
    "ScheduleActivityUpdate",
    "StatusResponse",
    "TeamCreate",
    "TeamRead",
    "TimeSlotRead",
    "TimezoneUpdate",
    "UserCreate",
    "UserRead",
    "WeekAccessRead",
    "WeekScheduleRead",
]

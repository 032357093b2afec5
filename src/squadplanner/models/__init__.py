from squadplanner.models.availability import PlayerWeeklyAvailability
from squadplanner.models.schedule import ActivityResponse, ScheduleActivity
from squadplanner.models.team import Team
from squadplanner.models.user import User

__all__ = [
    "ActivityResponse",
    "PlayerWeeklyAvailability",
    "ScheduleActivity",
    "Team",
    "User",
]

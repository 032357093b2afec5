from datetime import date, datetime

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from squadplanner.database import Base


class ScheduleActivity(Base):
    __tablename__ = "schedule_activities"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), index=True)
    type: Mapped[str] = mapped_column(
        String(30)
    )  # practice, individual_training, group_training, official_match, tournament, meeting
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    day_of_week: Mapped[int]  # 0=Monday, 6=Sunday
    activity_date: Mapped[date | None] = mapped_column(default=None)  # one-off; wins over day_of_week
    time_slot: Mapped[str] = mapped_column(String(10))  # org-local label, e.g. "3:00 PM"
    duration: Mapped[int] = mapped_column(default=1)  # hours
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class ActivityResponse(Base):
    __tablename__ = "schedule_activity_responses"
    __table_args__ = (UniqueConstraint("activity_id", "player_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    activity_id: Mapped[int] = mapped_column(ForeignKey("schedule_activities.id", ondelete="CASCADE"))
    player_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    status: Mapped[str] = mapped_column(String(20))  # available, unavailable, maybe
    notes: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

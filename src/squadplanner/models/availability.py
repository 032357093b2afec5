from datetime import date, datetime

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from squadplanner.database import Base


class PlayerWeeklyAvailability(Base):
    __tablename__ = "player_weekly_availability"
    __table_args__ = (UniqueConstraint("player_id", "team_id", "week_start"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    week_start: Mapped[date]  # Monday of the target week
    week_end: Mapped[date]  # Sunday of the target week
    time_slots: Mapped[str] = mapped_column(Text, default="{}")  # JSON: {"monday": {"15": true}}
    notes: Mapped[str | None] = mapped_column(Text, default=None)
    submitted_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

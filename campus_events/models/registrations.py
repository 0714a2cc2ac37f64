import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_events.database.db import Base, utcnow


class AttendanceStatus(str, enum.Enum):
    PRESENT = "Present"


class Registration(Base):
    """One row per individual attendee; team members share a team_id."""

    __tablename__ = "registrations"
    __table_args__ = (
        # Members registered by a team leader carry user_id NULL, which the
        # constraint ignores, so only account holders are limited to one row.
        UniqueConstraint("event_id", "user_id", name="uq_registrations_event_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id"), nullable=False, index=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), index=True)
    participant_name: Mapped[str] = mapped_column(String(200), nullable=False)
    participant_email: Mapped[str] = mapped_column(String(320), nullable=False)
    participant_phone: Mapped[str | None] = mapped_column(String(32))
    college: Mapped[str | None] = mapped_column(String(200))
    year: Mapped[str | None] = mapped_column(String(32))
    team_name: Mapped[str | None] = mapped_column(String(200))
    team_id: Mapped[str | None] = mapped_column(String(64), index=True)
    is_team_leader: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    registration_code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    event: Mapped["Event"] = relationship(back_populates="registrations")


class Attendance(Base):
    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    registration_id: Mapped[int] = mapped_column(
        ForeignKey("registrations.id"), nullable=False, unique=True, index=True
    )
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id"), nullable=False, index=True)
    team_id: Mapped[str | None] = mapped_column(String(64))
    marked_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=AttendanceStatus.PRESENT.value)
    marked_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

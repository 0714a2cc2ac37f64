import enum
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_events.database.db import Base, utcnow


class EventCategory(str, enum.Enum):
    WORKSHOP = "Workshop"
    SEMINAR = "Seminar"
    SPORTS = "Sports"
    CULTURAL = "Cultural"
    TECHNICAL = "Technical"
    SOCIAL = "Social"
    HACKATHON = "Hackathon"


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(16), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    organizer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    is_team_event: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    team_size: Mapped[int | None] = mapped_column(Integer)
    requirements: Mapped[str | None] = mapped_column(Text)

    # Optional organizer contact details shown on the event page
    organizer_name: Mapped[str | None] = mapped_column(String(200))
    organizer_email: Mapped[str | None] = mapped_column(String(320))
    organizer_phone: Mapped[str | None] = mapped_column(String(32))
    organizer_role: Mapped[str | None] = mapped_column(String(100))
    show_contact_info: Mapped[bool | None] = mapped_column(Boolean)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    registrations: Mapped[list["Registration"]] = relationship(back_populates="event")

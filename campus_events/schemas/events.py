import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from campus_events.models.events import EventCategory


# ---------- Event ----------
class EventFields(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    date: dt.date
    time: str = Field(min_length=1, max_length=16)
    location: str = Field(min_length=1, max_length=200)
    category: EventCategory
    max_participants: int = Field(ge=1)
    is_team_event: bool = False
    team_size: Optional[int] = None
    requirements: Optional[str] = None
    organizer_name: Optional[str] = None
    organizer_email: Optional[str] = None
    organizer_phone: Optional[str] = None
    organizer_role: Optional[str] = None
    show_contact_info: Optional[bool] = None


class EventCreate(EventFields):
    organizer_id: int = Field(ge=1)


class EventUpdate(EventFields):
    user_id: int = Field(ge=1)


class EventReassign(BaseModel):
    new_organizer_id: int = Field(ge=1)


class EventOut(BaseModel):
    id: int
    title: str
    description: str
    date: dt.date
    time: str
    location: str
    category: str
    max_participants: int
    organizer_id: int
    is_team_event: bool
    team_size: Optional[int] = None
    requirements: Optional[str] = None
    organizer_name: Optional[str] = None
    organizer_email: Optional[str] = None
    organizer_phone: Optional[str] = None
    organizer_role: Optional[str] = None
    show_contact_info: Optional[bool] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True

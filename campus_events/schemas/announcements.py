from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campus_events.models.announcements import AnnouncementPriority


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1)
    event_id: Optional[int] = None
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    organizer_id: int = Field(ge=1)


class AnnouncementOut(BaseModel):
    id: int
    title: str
    message: str
    event_id: Optional[int] = None
    priority: str
    created_by_organizer_id: int
    created_at: datetime

    class Config:
        from_attributes = True

import datetime as dt
from typing import Dict, Optional

from pydantic import BaseModel


class HistoryItemOut(BaseModel):
    registration_id: int
    registration_code: str
    event_id: int
    event_title: str
    event_date: dt.date
    event_time: str
    event_location: str
    event_category: str
    is_team_event: bool
    team_name: Optional[str] = None
    is_team_leader: bool
    attended: bool
    attended_at: Optional[dt.datetime] = None


class ParticipantStatsOut(BaseModel):
    total_registrations: int
    total_attended: int
    attendance_rate: int
    top_category: Optional[str] = None
    category_counts: Dict[str, int]

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class TeamMember(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)


class RegisterRequest(BaseModel):
    event_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    participant_name: str = Field(min_length=1, max_length=200)
    participant_email: str = Field(min_length=3, max_length=320)
    participant_phone: str = ""
    college: str = ""
    year: str = ""
    team_name: Optional[str] = None
    team_members: Optional[List[TeamMember]] = None


class CancelRequest(BaseModel):
    event_id: int = Field(ge=1)
    user_id: int = Field(ge=1)


class MarkAttendanceRequest(BaseModel):
    registration_id: int = Field(ge=1)
    organizer_id: int = Field(ge=1)


class RegistrationOut(BaseModel):
    id: int
    event_id: int
    user_id: Optional[int] = None
    participant_name: str
    participant_email: str
    participant_phone: Optional[str] = None
    college: Optional[str] = None
    year: Optional[str] = None
    team_name: Optional[str] = None
    team_id: Optional[str] = None
    is_team_leader: bool
    registration_code: str
    created_at: datetime

    class Config:
        from_attributes = True


class RegisterResult(BaseModel):
    registration_id: int
    registration_code: str
    registration_ids: List[int]
    registration_codes: List[str]
    team_id: Optional[str] = None


class AttendanceOut(BaseModel):
    id: int
    registration_id: int
    event_id: int
    team_id: Optional[str] = None
    marked_by: int
    status: str
    marked_at: datetime

    class Config:
        from_attributes = True


class MarkAttendanceResult(BaseModel):
    success: bool
    already_marked: bool
    message: str
    attendance: AttendanceOut

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campus_events.models.discussions import DiscussionType, ReportContentType, ReportStatus
from campus_events.models.users import UserRole


class DiscussionCreate(BaseModel):
    event_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    user_name: str = Field(min_length=1, max_length=200)
    user_role: UserRole
    type: DiscussionType
    title: Optional[str] = None
    message: str = Field(min_length=1)


class DiscussionOut(BaseModel):
    id: int
    event_id: int
    user_id: int
    user_name: str
    user_role: str
    type: str
    title: Optional[str] = None
    message: str
    is_answered: Optional[bool] = None
    is_pinned: bool
    created_at: datetime

    class Config:
        from_attributes = True


class PinResult(BaseModel):
    success: bool = True
    is_pinned: bool


class CommentCreate(BaseModel):
    user_id: int = Field(ge=1)
    user_name: str = Field(min_length=1, max_length=200)
    user_role: UserRole
    message: str = Field(min_length=1)
    is_answer: bool = False


class CommentOut(BaseModel):
    id: int
    discussion_id: int
    user_id: int
    user_name: str
    user_role: str
    message: str
    is_answer: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ReportCreate(BaseModel):
    user_id: int = Field(ge=1)
    user_name: str = Field(min_length=1, max_length=200)
    content_type: ReportContentType
    content_id: int = Field(ge=1)
    reason: str = Field(min_length=1)


class ReportResolve(BaseModel):
    user_id: int = Field(ge=1)
    status: ReportStatus


class ReportOut(BaseModel):
    id: int
    reported_by_user_id: int
    reported_by_name: str
    content_type: str
    content_id: int
    reason: str
    status: str
    reviewed_by_organizer_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True

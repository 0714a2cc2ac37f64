from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AnonymousUserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class OrganizerUserCreate(BaseModel):
    email: str = Field(min_length=3, max_length=320)


class UserIdOut(BaseModel):
    id: int


class UserOut(BaseModel):
    id: int
    role: str
    email: Optional[str] = None
    name: Optional[str] = None
    is_anonymous: bool
    created_at: datetime

    class Config:
        from_attributes = True

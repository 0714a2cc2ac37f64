from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PhotoCreate(BaseModel):
    event_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    user_name: str = Field(min_length=1, max_length=200)
    storage_id: str = Field(min_length=1, max_length=64)
    caption: Optional[str] = None


class PhotoOut(BaseModel):
    id: int
    event_id: int
    uploaded_by_user_id: int
    uploaded_by_name: str
    storage_id: str
    caption: Optional[str] = None
    likes: int
    uploaded_at: datetime

    class Config:
        from_attributes = True


class LikeResult(BaseModel):
    success: bool = True
    liked: bool


class UploadUrlOut(BaseModel):
    storage_id: str
    upload_url: str


class StorageUrlOut(BaseModel):
    storage_id: str
    url: Optional[str] = None

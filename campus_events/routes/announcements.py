from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_events.database.db import get_db
from campus_events.schemas.announcements import AnnouncementCreate, AnnouncementOut
from campus_events.schemas.auth import SuccessOut
from campus_events.services import announcements

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.post("", response_model=AnnouncementOut)
def create_announcement(payload: AnnouncementCreate, db: Session = Depends(get_db)):
    return announcements.create_announcement(
        db,
        organizer_id=payload.organizer_id,
        title=payload.title,
        message=payload.message,
        event_id=payload.event_id,
        priority=payload.priority.value,
    )


@router.get("", response_model=List[AnnouncementOut])
def list_all_announcements(db: Session = Depends(get_db)):
    return announcements.list_all_announcements(db)


@router.get("/general", response_model=List[AnnouncementOut])
def list_general_announcements(db: Session = Depends(get_db)):
    return announcements.list_general_announcements(db)


@router.get("/event/{event_id}", response_model=List[AnnouncementOut])
def list_event_announcements(event_id: int, db: Session = Depends(get_db)):
    return announcements.list_event_announcements(db, event_id)


@router.get("/organizer/{organizer_id}", response_model=List[AnnouncementOut])
def list_organizer_announcements(organizer_id: int, db: Session = Depends(get_db)):
    return announcements.list_organizer_announcements(db, organizer_id)


@router.delete("/{announcement_id}", response_model=SuccessOut)
def delete_announcement(announcement_id: int, organizer_id: int, db: Session = Depends(get_db)):
    announcements.delete_announcement(db, announcement_id=announcement_id, organizer_id=organizer_id)
    return {"success": True}

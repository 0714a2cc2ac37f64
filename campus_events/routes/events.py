from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campus_events.database.db import get_db
from campus_events.schemas.auth import SuccessOut
from campus_events.schemas.events import EventCreate, EventOut, EventReassign, EventUpdate
from campus_events.services import events

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventOut)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude={"organizer_id"})
    return events.create_event(db, organizer_id=payload.organizer_id, **fields)


@router.get("", response_model=List[EventOut])
def list_events(db: Session = Depends(get_db)):
    return events.list_events(db)


@router.get("/organizer/{organizer_id}", response_model=List[EventOut])
def list_events_by_organizer(organizer_id: int, db: Session = Depends(get_db)):
    return events.list_events_by_organizer(db, organizer_id)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int, db: Session = Depends(get_db)):
    event = events.get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.put("/{event_id}", response_model=EventOut)
def update_event(event_id: int, payload: EventUpdate, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude={"user_id"})
    return events.update_event(db, event_id=event_id, user_id=payload.user_id, **fields)


@router.delete("/{event_id}", response_model=SuccessOut)
def delete_event(event_id: int, user_id: int, db: Session = Depends(get_db)):
    events.delete_event(db, event_id=event_id, user_id=user_id)
    return {"success": True}


@router.post("/{event_id}/reassign", response_model=EventOut)
def reassign_organizer(event_id: int, payload: EventReassign, db: Session = Depends(get_db)):
    return events.reassign_organizer(db, event_id=event_id, new_organizer_id=payload.new_organizer_id)

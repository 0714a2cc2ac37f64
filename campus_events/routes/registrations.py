from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campus_events.database.db import get_db
from campus_events.schemas.registrations import (
    AttendanceOut,
    CancelRequest,
    MarkAttendanceRequest,
    MarkAttendanceResult,
    RegisterRequest,
    RegisterResult,
    RegistrationOut,
)
from campus_events.services import registrations
from campus_events.services.registrations import TeamMemberInput

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.post("", response_model=RegisterResult)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    members = [TeamMemberInput(name=m.name, email=m.email) for m in payload.team_members or []]
    return registrations.register(
        db,
        event_id=payload.event_id,
        user_id=payload.user_id,
        participant_name=payload.participant_name,
        participant_email=payload.participant_email,
        participant_phone=payload.participant_phone,
        college=payload.college,
        year=payload.year,
        team_name=payload.team_name,
        team_members=members,
    )


@router.post("/cancel")
def cancel_registration(payload: CancelRequest, db: Session = Depends(get_db)):
    removed = registrations.cancel_registration(db, event_id=payload.event_id, user_id=payload.user_id)
    return {"success": True, "removed": removed}


@router.get("/status", response_model=Optional[RegistrationOut])
def get_user_registration(event_id: int, user_id: int, db: Session = Depends(get_db)):
    """The caller's own registration for an event, or null."""
    return registrations.get_user_registration(db, event_id=event_id, user_id=user_id)


@router.get("/event/{event_id}", response_model=List[RegistrationOut])
def list_event_registrations(event_id: int, db: Session = Depends(get_db)):
    return registrations.list_event_registrations(db, event_id)


@router.get("/user/{user_id}", response_model=List[RegistrationOut])
def list_user_registrations(user_id: int, db: Session = Depends(get_db)):
    return registrations.list_user_registrations(db, user_id)


@router.get("/team/{team_id}", response_model=List[RegistrationOut])
def list_team_registrations(team_id: str, db: Session = Depends(get_db)):
    return registrations.list_team_registrations(db, team_id)


@router.get("/code/{code}", response_model=RegistrationOut)
def get_registration_by_code(code: str, db: Session = Depends(get_db)):
    registration = registrations.get_registration_by_code(db, code)
    if not registration:
        raise HTTPException(status_code=404, detail="Registration not found")
    return registration


@router.post("/attendance", response_model=MarkAttendanceResult)
def mark_attendance(payload: MarkAttendanceRequest, db: Session = Depends(get_db)):
    result = registrations.mark_attendance(
        db, registration_id=payload.registration_id, organizer_id=payload.organizer_id
    )
    return {
        "success": result.success,
        "already_marked": result.already_marked,
        "message": result.message,
        "attendance": result.attendance,
    }


@router.get("/attendance/event/{event_id}", response_model=List[AttendanceOut])
def get_event_attendance(event_id: int, db: Session = Depends(get_db)):
    return registrations.get_event_attendance(db, event_id)


@router.get("/{registration_id}/attendance", response_model=Optional[AttendanceOut])
def get_registration_attendance(registration_id: int, db: Session = Depends(get_db)):
    return registrations.get_registration_attendance(db, registration_id)


@router.get("/{registration_id}", response_model=RegistrationOut)
def get_registration(registration_id: int, db: Session = Depends(get_db)):
    registration = registrations.get_registration(db, registration_id)
    if not registration:
        raise HTTPException(status_code=404, detail="Registration not found")
    return registration

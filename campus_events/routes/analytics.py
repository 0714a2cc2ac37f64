from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_events.database.db import get_db
from campus_events.schemas.analytics import (
    CategoryStatOut,
    EventAttendanceRateOut,
    HourBucketOut,
    OrganizerSummaryOut,
    TrendPointOut,
)
from campus_events.schemas.history import HistoryItemOut, ParticipantStatsOut
from campus_events.services import analytics, history

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/organizer/{organizer_id}/summary", response_model=OrganizerSummaryOut)
def organizer_summary(organizer_id: int, db: Session = Depends(get_db)):
    """Totals across all of an organizer's events."""
    return analytics.get_organizer_summary(db, organizer_id)


@router.get("/organizer/{organizer_id}/trends", response_model=List[TrendPointOut])
def registration_trends(organizer_id: int, db: Session = Depends(get_db)):
    return analytics.get_registration_trends(db, organizer_id)


@router.get("/organizer/{organizer_id}/categories", response_model=List[CategoryStatOut])
def category_stats(organizer_id: int, db: Session = Depends(get_db)):
    return analytics.get_category_stats(db, organizer_id)


@router.get("/organizer/{organizer_id}/attendance", response_model=List[EventAttendanceRateOut])
def attendance_rates(organizer_id: int, db: Session = Depends(get_db)):
    return analytics.get_attendance_rates(db, organizer_id)


@router.get("/organizer/{organizer_id}/peak-times", response_model=List[HourBucketOut])
def peak_registration_times(organizer_id: int, db: Session = Depends(get_db)):
    return analytics.get_peak_registration_times(db, organizer_id)


@router.get("/participant/{user_id}/history", response_model=List[HistoryItemOut])
def attendance_history(user_id: int, db: Session = Depends(get_db)):
    return history.get_attendance_history(db, user_id)


@router.get("/participant/{user_id}/stats", response_model=ParticipantStatsOut)
def participant_stats(user_id: int, db: Session = Depends(get_db)):
    return history.get_participant_stats(db, user_id)

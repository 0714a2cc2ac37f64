from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_events.database.db import get_db
from campus_events.models.discussions import DiscussionType, ReportStatus
from campus_events.schemas.auth import SuccessOut
from campus_events.schemas.discussions import (
    CommentCreate,
    CommentOut,
    DiscussionCreate,
    DiscussionOut,
    PinResult,
    ReportCreate,
    ReportOut,
    ReportResolve,
)
from campus_events.services import discussions

router = APIRouter(prefix="/discussions", tags=["discussions"])


@router.post("", response_model=DiscussionOut)
def create_discussion(payload: DiscussionCreate, db: Session = Depends(get_db)):
    return discussions.create_discussion(db, **payload.model_dump())


@router.get("/event/{event_id}", response_model=List[DiscussionOut])
def list_event_discussions(
    event_id: int, type: Optional[DiscussionType] = None, db: Session = Depends(get_db)
):
    return discussions.list_event_discussions(db, event_id, type=type.value if type else None)


@router.post("/{discussion_id}/pin", response_model=PinResult)
def toggle_pin(discussion_id: int, user_id: int, db: Session = Depends(get_db)):
    is_pinned = discussions.toggle_pin(db, discussion_id=discussion_id, user_id=user_id)
    return {"success": True, "is_pinned": is_pinned}


@router.delete("/{discussion_id}", response_model=SuccessOut)
def delete_discussion(discussion_id: int, user_id: int, db: Session = Depends(get_db)):
    discussions.delete_discussion(db, discussion_id=discussion_id, user_id=user_id)
    return {"success": True}


@router.post("/{discussion_id}/comments", response_model=CommentOut)
def add_comment(discussion_id: int, payload: CommentCreate, db: Session = Depends(get_db)):
    return discussions.add_comment(db, discussion_id=discussion_id, **payload.model_dump())


@router.get("/{discussion_id}/comments", response_model=List[CommentOut])
def list_comments(discussion_id: int, db: Session = Depends(get_db)):
    return discussions.list_comments(db, discussion_id)


@router.delete("/comments/{comment_id}", response_model=SuccessOut)
def delete_comment(comment_id: int, user_id: int, db: Session = Depends(get_db)):
    discussions.delete_comment(db, comment_id=comment_id, user_id=user_id)
    return {"success": True}


@router.post("/reports", response_model=ReportOut)
def report_content(payload: ReportCreate, db: Session = Depends(get_db)):
    return discussions.report_content(db, **payload.model_dump())


@router.get("/reports", response_model=List[ReportOut])
def list_reports(user_id: int, status: Optional[ReportStatus] = None, db: Session = Depends(get_db)):
    return discussions.list_reports(db, user_id=user_id, status=status.value if status else None)


@router.post("/reports/{report_id}/resolve", response_model=ReportOut)
def resolve_report(report_id: int, payload: ReportResolve, db: Session = Depends(get_db)):
    return discussions.resolve_report(db, report_id=report_id, user_id=payload.user_id, status=payload.status.value)

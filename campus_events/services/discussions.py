import structlog
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from campus_events.core.errors import ConflictError, NotFoundError
from campus_events.core.security import require_author_or_organizer, require_organizer
from campus_events.database.db import transaction
from campus_events.models.discussions import (
    Comment,
    Discussion,
    DiscussionType,
    Report,
    ReportContentType,
    ReportStatus,
)
from campus_events.models.events import Event

logger = structlog.get_logger(__name__)


def _value(item):
    return getattr(item, "value", item)


def create_discussion(
    db: Session,
    *,
    event_id: int,
    user_id: int,
    user_name: str,
    user_role: str,
    type: str,
    message: str,
    title: str | None = None,
) -> Discussion:
    if not db.get(Event, event_id):
        raise NotFoundError("Event not found")

    type = _value(type)
    with transaction(db):
        discussion = Discussion(
            event_id=event_id,
            user_id=user_id,
            user_name=user_name,
            user_role=_value(user_role),
            type=type,
            title=title,
            message=message,
            is_answered=False if type == DiscussionType.QUESTION.value else None,
            is_pinned=False,
        )
        db.add(discussion)
        db.flush()

    logger.info("Discussion created", discussion_id=discussion.id, event_id=event_id, type=type)
    return discussion


def list_event_discussions(db: Session, event_id: int, type: str | None = None) -> list[Discussion]:
    """Pinned first; for questions, unanswered before answered; then newest first."""
    stmt = select(Discussion).where(Discussion.event_id == event_id)
    if type is not None:
        type = _value(type)
        stmt = stmt.where(Discussion.type == type)
    discussions = list(db.scalars(stmt))

    def sort_key(d: Discussion):
        unanswered_rank = 0
        if type == DiscussionType.QUESTION.value:
            unanswered_rank = 1 if d.is_answered else 0
        return (0 if d.is_pinned else 1, unanswered_rank, -d.created_at.timestamp(), -d.id)

    return sorted(discussions, key=sort_key)


def toggle_pin(db: Session, *, discussion_id: int, user_id: int) -> bool:
    require_organizer(db, user_id, "pin discussions")
    discussion = db.get(Discussion, discussion_id)
    if not discussion:
        raise NotFoundError("Discussion not found")

    with transaction(db):
        discussion.is_pinned = not discussion.is_pinned
    return discussion.is_pinned


def delete_discussion(db: Session, *, discussion_id: int, user_id: int) -> None:
    discussion = db.get(Discussion, discussion_id)
    if not discussion:
        raise NotFoundError("Discussion not found")
    require_author_or_organizer(db, discussion.user_id, user_id, "discussions")

    with transaction(db):
        db.execute(delete(Comment).where(Comment.discussion_id == discussion_id))
        db.delete(discussion)
    logger.info("Discussion deleted", discussion_id=discussion_id, user_id=user_id)


def add_comment(
    db: Session,
    *,
    discussion_id: int,
    user_id: int,
    user_name: str,
    user_role: str,
    message: str,
    is_answer: bool = False,
) -> Comment:
    discussion = db.get(Discussion, discussion_id)
    if not discussion:
        raise NotFoundError("Discussion not found")

    with transaction(db):
        comment = Comment(
            discussion_id=discussion_id,
            user_id=user_id,
            user_name=user_name,
            user_role=_value(user_role),
            message=message,
            is_answer=is_answer,
        )
        db.add(comment)
        if is_answer:
            discussion.is_answered = True
        db.flush()
    return comment


def list_comments(db: Session, discussion_id: int) -> list[Comment]:
    return list(
        db.scalars(
            select(Comment)
            .where(Comment.discussion_id == discussion_id)
            .order_by(Comment.created_at, Comment.id)
        )
    )


def delete_comment(db: Session, *, comment_id: int, user_id: int) -> None:
    comment = db.get(Comment, comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    require_author_or_organizer(db, comment.user_id, user_id, "comments")

    with transaction(db):
        db.delete(comment)


def report_content(
    db: Session, *, user_id: int, user_name: str, content_type: str, content_id: int, reason: str
) -> Report:
    content_type = _value(content_type)
    existing = db.scalar(
        select(Report).where(
            Report.content_type == content_type,
            Report.content_id == content_id,
            Report.reported_by_user_id == user_id,
        )
    )
    if existing:
        raise ConflictError("You have already reported this content")

    model = Discussion if content_type == ReportContentType.DISCUSSION.value else Comment
    if not db.get(model, content_id):
        raise NotFoundError(f"{content_type.capitalize()} not found")

    with transaction(db):
        report = Report(
            reported_by_user_id=user_id,
            reported_by_name=user_name,
            content_type=content_type,
            content_id=content_id,
            reason=reason,
            status=ReportStatus.PENDING.value,
        )
        db.add(report)
        db.flush()

    logger.warning("Content reported", report_id=report.id, content_type=content_type, content_id=content_id)
    return report


def list_reports(db: Session, *, user_id: int, status: str | None = None) -> list[Report]:
    require_organizer(db, user_id, "view reports")
    stmt = select(Report)
    if status is not None:
        stmt = stmt.where(Report.status == _value(status))
    return list(db.scalars(stmt.order_by(Report.created_at.desc(), Report.id.desc())))


def resolve_report(db: Session, *, report_id: int, user_id: int, status: str) -> Report:
    require_organizer(db, user_id, "resolve reports")
    report = db.get(Report, report_id)
    if not report:
        raise NotFoundError("Report not found")

    with transaction(db):
        report.status = _value(status)
        report.reviewed_by_organizer_id = user_id
    logger.info("Report resolved", report_id=report_id, status=report.status)
    return report

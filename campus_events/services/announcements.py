import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_events.core.errors import NotFoundError, UnauthorizedError
from campus_events.core.security import require_organizer
from campus_events.database.db import transaction
from campus_events.models.announcements import Announcement, AnnouncementPriority
from campus_events.models.events import Event

logger = structlog.get_logger(__name__)

GENERAL_ANNOUNCEMENT_LIMIT = 5


def create_announcement(
    db: Session,
    *,
    organizer_id: int,
    title: str,
    message: str,
    event_id: int | None = None,
    priority: str = AnnouncementPriority.NORMAL.value,
) -> Announcement:
    require_organizer(db, organizer_id, "create announcements")

    if event_id is not None:
        event = db.get(Event, event_id)
        if not event:
            raise NotFoundError("Event not found")
        if event.organizer_id != organizer_id:
            raise UnauthorizedError("You can only create announcements for your own events")

    with transaction(db):
        announcement = Announcement(
            title=title,
            message=message,
            event_id=event_id,
            priority=getattr(priority, "value", priority),
            created_by_organizer_id=organizer_id,
        )
        db.add(announcement)
        db.flush()

    logger.info("Announcement created", announcement_id=announcement.id, event_id=event_id)
    return announcement


def list_general_announcements(db: Session) -> list[Announcement]:
    """Latest announcements not tied to an event."""
    return list(
        db.scalars(
            select(Announcement)
            .where(Announcement.event_id.is_(None))
            .order_by(Announcement.created_at.desc(), Announcement.id.desc())
            .limit(GENERAL_ANNOUNCEMENT_LIMIT)
        )
    )


def list_event_announcements(db: Session, event_id: int) -> list[Announcement]:
    return list(
        db.scalars(
            select(Announcement)
            .where(Announcement.event_id == event_id)
            .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        )
    )


def list_organizer_announcements(db: Session, organizer_id: int) -> list[Announcement]:
    return list(
        db.scalars(
            select(Announcement)
            .where(Announcement.created_by_organizer_id == organizer_id)
            .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        )
    )


def list_all_announcements(db: Session) -> list[Announcement]:
    return list(db.scalars(select(Announcement).order_by(Announcement.created_at.desc(), Announcement.id.desc())))


def delete_announcement(db: Session, *, announcement_id: int, organizer_id: int) -> None:
    announcement = db.get(Announcement, announcement_id)
    if not announcement:
        raise NotFoundError("Announcement not found")
    if announcement.created_by_organizer_id != organizer_id:
        raise UnauthorizedError("You can only delete your own announcements")

    with transaction(db):
        db.delete(announcement)
    logger.info("Announcement deleted", announcement_id=announcement_id)

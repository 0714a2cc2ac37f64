import structlog
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from campus_events.core.errors import NotFoundError, UnauthorizedError, ValidationFailedError
from campus_events.core.security import require_organizer
from campus_events.database.db import transaction
from campus_events.models.announcements import Announcement
from campus_events.models.discussions import Comment, Discussion, Report, ReportContentType
from campus_events.models.events import Event
from campus_events.models.photos import Photo, PhotoLike
from campus_events.models.registrations import Attendance, Registration
from campus_events.services import storage

logger = structlog.get_logger(__name__)

# Fields an organizer may change after creation; organizer_id is not one of them
MUTABLE_FIELDS = (
    "title",
    "description",
    "date",
    "time",
    "location",
    "category",
    "max_participants",
    "is_team_event",
    "team_size",
    "requirements",
    "organizer_name",
    "organizer_email",
    "organizer_phone",
    "organizer_role",
    "show_contact_info",
)


def _normalize_team_config(fields: dict) -> dict:
    fields = dict(fields)
    if not fields.get("is_team_event"):
        fields["is_team_event"] = False
        fields["team_size"] = None
    elif not fields.get("team_size") or fields["team_size"] < 2:
        raise ValidationFailedError("Team events must have a team size of at least 2")
    category = fields.get("category")
    if category is not None and hasattr(category, "value"):
        fields["category"] = category.value
    return fields


def create_event(db: Session, *, organizer_id: int, **fields) -> Event:
    require_organizer(db, organizer_id, "create events")
    fields = _normalize_team_config(fields)

    with transaction(db):
        event = Event(organizer_id=organizer_id, **{name: fields.get(name) for name in MUTABLE_FIELDS})
        db.add(event)
        db.flush()

    logger.info("Event created", event_id=event.id, organizer_id=organizer_id, is_team_event=event.is_team_event)
    return event


def update_event(db: Session, *, event_id: int, user_id: int, **fields) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event not found")
    if event.organizer_id != user_id:
        raise UnauthorizedError("You can only edit your own events")
    fields = _normalize_team_config(fields)

    with transaction(db):
        for name in MUTABLE_FIELDS:
            setattr(event, name, fields.get(name))

    logger.info("Event updated", event_id=event_id, user_id=user_id)
    return event


def delete_event(db: Session, *, event_id: int, user_id: int) -> None:
    """Delete an event together with everything scoped to it."""
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event not found")
    require_organizer(db, user_id, "delete events")
    if event.organizer_id != user_id:
        raise UnauthorizedError("You can only delete your own events")

    discussion_ids = select(Discussion.id).where(Discussion.event_id == event_id)
    comment_ids = select(Comment.id).where(Comment.discussion_id.in_(discussion_ids))
    photo_ids = select(Photo.id).where(Photo.event_id == event_id)
    storage_ids = list(db.scalars(select(Photo.storage_id).where(Photo.event_id == event_id)))

    with transaction(db):
        db.execute(delete(Attendance).where(Attendance.event_id == event_id))
        db.execute(delete(Registration).where(Registration.event_id == event_id))
        db.execute(delete(Announcement).where(Announcement.event_id == event_id))
        db.execute(
            delete(Report).where(
                Report.content_type == ReportContentType.COMMENT.value,
                Report.content_id.in_(comment_ids),
            )
        )
        db.execute(
            delete(Report).where(
                Report.content_type == ReportContentType.DISCUSSION.value,
                Report.content_id.in_(discussion_ids),
            )
        )
        db.execute(delete(Comment).where(Comment.discussion_id.in_(discussion_ids)))
        db.execute(delete(Discussion).where(Discussion.event_id == event_id))
        db.execute(delete(PhotoLike).where(PhotoLike.photo_id.in_(photo_ids)))
        db.execute(delete(Photo).where(Photo.event_id == event_id))
        db.delete(event)

    # Blobs live outside the database; remove them once the rows are gone
    for storage_id in storage_ids:
        storage.delete(storage_id)

    logger.info("Event deleted", event_id=event_id, user_id=user_id, photos=len(storage_ids))


def reassign_organizer(db: Session, *, event_id: int, new_organizer_id: int) -> Event:
    """Maintenance utility to move an event to another organizer account."""
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event not found")
    require_organizer(db, new_organizer_id, "own events")

    with transaction(db):
        event.organizer_id = new_organizer_id

    logger.info("Event reassigned", event_id=event_id, organizer_id=new_organizer_id)
    return event


def get_event(db: Session, event_id: int) -> Event | None:
    return db.get(Event, event_id)


def list_events(db: Session) -> list[Event]:
    return list(db.scalars(select(Event).order_by(Event.date, Event.id)))


def list_events_by_organizer(db: Session, organizer_id: int) -> list[Event]:
    return list(db.scalars(select(Event).where(Event.organizer_id == organizer_id).order_by(Event.date, Event.id)))

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.core.errors import NotFoundError
from campus_events.core.security import require_author_or_organizer
from campus_events.database.db import transaction
from campus_events.models.events import Event
from campus_events.models.photos import Photo, PhotoLike
from campus_events.services import storage

logger = structlog.get_logger(__name__)


def upload_photo(
    db: Session, *, event_id: int, user_id: int, user_name: str, storage_id: str, caption: str | None = None
) -> Photo:
    """Record metadata for a blob the client already uploaded."""
    if not db.get(Event, event_id):
        raise NotFoundError("Event not found")
    if storage.get_url(storage_id) is None:
        raise NotFoundError("Uploaded file not found")

    with transaction(db):
        photo = Photo(
            event_id=event_id,
            uploaded_by_user_id=user_id,
            uploaded_by_name=user_name,
            storage_id=storage_id,
            caption=caption,
            likes=0,
        )
        db.add(photo)
        db.flush()

    logger.info("Photo uploaded", photo_id=photo.id, event_id=event_id, user_id=user_id)
    return photo


def list_event_photos(db: Session, event_id: int) -> list[Photo]:
    return list(
        db.scalars(select(Photo).where(Photo.event_id == event_id).order_by(Photo.uploaded_at.desc(), Photo.id.desc()))
    )


def _get_like(db: Session, photo_id: int, user_id: int) -> PhotoLike | None:
    return db.scalar(select(PhotoLike).where(PhotoLike.photo_id == photo_id, PhotoLike.user_id == user_id))


def toggle_like(db: Session, *, photo_id: int, user_id: int) -> bool:
    """Like the photo, or unlike it when already liked. Returns the new state."""
    photo = db.get(Photo, photo_id)
    if not photo:
        raise NotFoundError("Photo not found")

    existing = _get_like(db, photo_id, user_id)
    try:
        with transaction(db):
            if existing:
                db.delete(existing)
                photo.likes = max(0, (photo.likes or 0) - 1)
                liked = False
            else:
                db.add(PhotoLike(photo_id=photo_id, user_id=user_id))
                photo.likes = (photo.likes or 0) + 1
                liked = True
    except IntegrityError:
        # Double click raced with itself; the first like stands
        return True
    return liked


def has_liked(db: Session, *, photo_id: int, user_id: int) -> bool:
    return _get_like(db, photo_id, user_id) is not None


def delete_photo(db: Session, *, photo_id: int, user_id: int) -> None:
    photo = db.get(Photo, photo_id)
    if not photo:
        raise NotFoundError("Photo not found")
    require_author_or_organizer(db, photo.uploaded_by_user_id, user_id, "photos")

    storage_id = photo.storage_id
    with transaction(db):
        db.execute(delete(PhotoLike).where(PhotoLike.photo_id == photo_id))
        db.delete(photo)
    storage.delete(storage_id)

    logger.info("Photo deleted", photo_id=photo_id, user_id=user_id)

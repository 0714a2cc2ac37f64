import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.database.db import transaction
from campus_events.models.users import User, UserRole

logger = structlog.get_logger(__name__)


def create_anonymous_user(db: Session, *, name: str) -> User:
    with transaction(db):
        user = User(role=UserRole.PARTICIPANT.value, is_anonymous=True, name=name)
        db.add(user)
        db.flush()
    logger.info("Created anonymous user", user_id=user.id)
    return user


def create_organizer_user(db: Session, *, email: str) -> User:
    """Return the organizer bound to ``email``, creating it on first sign-in."""
    existing = get_user_by_email(db, email)
    if existing:
        return existing

    try:
        with transaction(db):
            user = User(role=UserRole.ORGANIZER.value, is_anonymous=False, email=email)
            db.add(user)
            db.flush()
    except IntegrityError:
        # A concurrent first sign-in created the account; use that one
        existing = get_user_by_email(db, email)
        if existing is None:
            raise
        return existing
    logger.info("Created organizer user", user_id=user.id, email=email)
    return user


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email))

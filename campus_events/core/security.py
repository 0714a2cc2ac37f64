"""Capability checks shared by every operation that needs one."""

from sqlalchemy.orm import Session

from campus_events.core.errors import NotFoundError, UnauthorizedError
from campus_events.models.users import User


def get_user_or_raise(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def require_organizer(db: Session, user_id: int, action: str) -> User:
    """Return the user if they are an organizer, else refuse ``action``."""
    user = db.get(User, user_id)
    if not user or not user.is_organizer:
        raise UnauthorizedError(f"Only organizers can {action}")
    return user


def require_author_or_organizer(db: Session, author_id: int, user_id: int, what: str) -> None:
    if author_id == user_id:
        return
    user = db.get(User, user_id)
    if not user or not user.is_organizer:
        raise UnauthorizedError(f"You can only delete your own {what}")

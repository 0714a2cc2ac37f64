from dataclasses import dataclass, field

import redis
import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.core import config, redis_config
from campus_events.core.errors import ConflictError, NotFoundError, ValidationFailedError
from campus_events.core.security import require_organizer
from campus_events.database.db import transaction
from campus_events.models.events import Event
from campus_events.models.registrations import Attendance, AttendanceStatus, Registration
from campus_events.services.codes import generate_team_id, generate_unique_registration_code

logger = structlog.get_logger(__name__)


class AlreadyRegisteredError(ConflictError):
    pass


class EventNotFoundError(NotFoundError):
    pass


class RegistrationNotFoundError(NotFoundError):
    pass


class TeamSizeMismatchError(ValidationFailedError):
    pass


class TeamNameRequiredError(ValidationFailedError):
    pass


class NotEnoughSpaceError(ValidationFailedError):
    pass


class EventFullError(ValidationFailedError):
    pass


@dataclass
class TeamMemberInput:
    name: str
    email: str


@dataclass
class RegistrationResult:
    registration_id: int
    registration_code: str
    registration_ids: list[int] = field(default_factory=list)
    registration_codes: list[str] = field(default_factory=list)
    team_id: str | None = None


@dataclass
class AttendanceResult:
    success: bool
    already_marked: bool
    message: str
    attendance: Attendance


def register(
    db: Session,
    *,
    event_id: int,
    user_id: int,
    participant_name: str,
    participant_email: str,
    participant_phone: str = "",
    college: str = "",
    year: str = "",
    team_name: str | None = None,
    team_members: list[TeamMemberInput] | None = None,
) -> RegistrationResult:
    """
    Register a participant (and, for team events, the whole team).

    The capacity check and the inserts run under a per-event Redis lock and a
    single transaction, so a team is stored completely or not at all.
    """
    redis_client = redis_config.get_redis_client()
    lock_key = f"event_lock:{event_id}"
    lock = redis_client.lock(lock_key, timeout=config.REGISTRATION_LOCK_TIMEOUT)

    try:
        # Only one registration per event proceeds at a time
        acquired = lock.acquire(blocking=True, blocking_timeout=config.REGISTRATION_LOCK_WAIT)
    except redis.exceptions.LockError:  # type: ignore
        raise ConflictError("Could not acquire lock, please try again.")
    if not acquired:
        raise ConflictError("Could not acquire lock, please try again.")

    try:
        with transaction(db):
            result = _register_in_transaction(
                db,
                event_id=event_id,
                user_id=user_id,
                participant_name=participant_name,
                participant_email=participant_email,
                participant_phone=participant_phone,
                college=college,
                year=year,
                team_name=team_name,
                team_members=team_members or [],
            )
    except IntegrityError:
        # A unique constraint caught a concurrent writer; nothing was stored
        logger.warning("Registration rejected by constraint", event_id=event_id, user_id=user_id)
        if get_user_registration(db, event_id=event_id, user_id=user_id):
            raise AlreadyRegisteredError("Already registered for this event")
        raise ConflictError("Registration could not be completed, please try again.")
    finally:
        _release_lock(lock, event_id)

    logger.info(
        "Registration created",
        event_id=event_id,
        user_id=user_id,
        team_id=result.team_id,
        codes=result.registration_codes,
    )
    return result


def _release_lock(lock, event_id: int) -> None:
    try:
        lock.release()
    except redis.exceptions.LockNotOwnedError:  # type: ignore
        # The lock timed out while the transaction ran; the outcome stands
        logger.warning("Registration lock expired before release", event_id=event_id)


def _register_in_transaction(
    db: Session,
    *,
    event_id: int,
    user_id: int,
    participant_name: str,
    participant_email: str,
    participant_phone: str,
    college: str,
    year: str,
    team_name: str | None,
    team_members: list[TeamMemberInput],
) -> RegistrationResult:
    if get_user_registration(db, event_id=event_id, user_id=user_id):
        raise AlreadyRegisteredError("Already registered for this event")

    event = db.get(Event, event_id)
    if not event:
        raise EventNotFoundError("Event not found")

    current = count_event_registrations(db, event_id)

    if not event.is_team_event:
        if team_members or (team_name and team_name.strip()):
            raise ValidationFailedError("This event does not support team registration")
        if current >= event.max_participants:
            raise EventFullError("Event is full")

        registration = Registration(
            event_id=event_id,
            user_id=user_id,
            participant_name=participant_name,
            participant_email=participant_email,
            participant_phone=participant_phone,
            college=college,
            year=year,
            is_team_leader=False,
            registration_code=generate_unique_registration_code(db),
        )
        db.add(registration)
        db.flush()
        return RegistrationResult(
            registration_id=registration.id,
            registration_code=registration.registration_code,
            registration_ids=[registration.id],
            registration_codes=[registration.registration_code],
        )

    if not event.team_size:
        raise ValidationFailedError("Team size is not configured for this event")

    total_people = 1 + len(team_members)
    if total_people != event.team_size:
        raise TeamSizeMismatchError(
            f"This event requires teams of exactly {event.team_size} participants"
        )
    if not team_name or not team_name.strip():
        raise TeamNameRequiredError("Team name is required for team events")
    if current + total_people > event.max_participants:
        raise NotEnoughSpaceError(
            f"Not enough space for your team: {event.max_participants - current} spots left"
        )

    team_id = generate_team_id()
    taken: set[str] = set()

    def _code() -> str:
        code = generate_unique_registration_code(db, taken)
        taken.add(code)
        return code

    # Leader first, then each member in the order given
    rows = [
        Registration(
            event_id=event_id,
            user_id=user_id,
            participant_name=participant_name,
            participant_email=participant_email,
            participant_phone=participant_phone,
            college=college,
            year=year,
            team_name=team_name,
            team_id=team_id,
            is_team_leader=True,
            registration_code=_code(),
        )
    ]
    for member in team_members:
        rows.append(
            Registration(
                event_id=event_id,
                user_id=None,
                participant_name=member.name,
                participant_email=member.email,
                college=college,
                year=year,
                team_name=team_name,
                team_id=team_id,
                is_team_leader=False,
                registration_code=_code(),
            )
        )
    db.add_all(rows)
    db.flush()

    return RegistrationResult(
        registration_id=rows[0].id,
        registration_code=rows[0].registration_code,
        registration_ids=[row.id for row in rows],
        registration_codes=[row.registration_code for row in rows],
        team_id=team_id,
    )


def cancel_registration(db: Session, *, event_id: int, user_id: int) -> int:
    """
    Remove the caller's registration. A team leader's cancellation removes
    the whole team. Returns the number of registrations deleted.
    """
    registration = get_user_registration(db, event_id=event_id, user_id=user_id)
    if not registration:
        raise RegistrationNotFoundError("Registration not found")

    with transaction(db):
        if registration.team_id:
            ids = list(db.scalars(select(Registration.id).where(Registration.team_id == registration.team_id)))
        else:
            ids = [registration.id]
        db.execute(delete(Attendance).where(Attendance.registration_id.in_(ids)))
        db.execute(delete(Registration).where(Registration.id.in_(ids)))

    logger.info("Registration cancelled", event_id=event_id, user_id=user_id, removed=len(ids))
    return len(ids)


def mark_attendance(db: Session, *, registration_id: int, organizer_id: int) -> AttendanceResult:
    """
    Mark a registration present. Marking the same registration again is not
    an error: the existing record is returned with ``already_marked`` set.
    """
    require_organizer(db, organizer_id, "mark attendance")

    registration = db.get(Registration, registration_id)
    if not registration:
        raise RegistrationNotFoundError("Registration not found")

    existing = get_registration_attendance(db, registration_id)
    if existing:
        return _already_marked(existing)

    try:
        with transaction(db):
            attendance = Attendance(
                registration_id=registration.id,
                event_id=registration.event_id,
                team_id=registration.team_id,
                marked_by=organizer_id,
                status=AttendanceStatus.PRESENT.value,
            )
            db.add(attendance)
            db.flush()
    except IntegrityError:
        # A concurrent scan inserted first; the unique index keeps one row
        existing = get_registration_attendance(db, registration_id)
        if existing is None:
            raise
        return _already_marked(existing)

    logger.info(
        "Attendance marked",
        registration_id=registration_id,
        event_id=attendance.event_id,
        organizer_id=organizer_id,
    )
    return AttendanceResult(
        success=True,
        already_marked=False,
        message="Attendance marked successfully",
        attendance=attendance,
    )


def _already_marked(attendance: Attendance) -> AttendanceResult:
    logger.info("Attendance already marked", registration_id=attendance.registration_id)
    return AttendanceResult(
        success=True,
        already_marked=True,
        message="Attendance already marked",
        attendance=attendance,
    )


def count_event_registrations(db: Session, event_id: int) -> int:
    return int(db.scalar(select(func.count(Registration.id)).where(Registration.event_id == event_id)) or 0)


def count_event_attendance(db: Session, event_id: int) -> int:
    return int(db.scalar(select(func.count(Attendance.id)).where(Attendance.event_id == event_id)) or 0)


def get_user_registration(db: Session, *, event_id: int, user_id: int) -> Registration | None:
    return db.scalar(
        select(Registration).where(Registration.event_id == event_id, Registration.user_id == user_id)
    )


def get_registration(db: Session, registration_id: int) -> Registration | None:
    return db.get(Registration, registration_id)


def get_registration_by_code(db: Session, code: str) -> Registration | None:
    return db.scalar(select(Registration).where(Registration.registration_code == code.strip().upper()))


def list_event_registrations(db: Session, event_id: int) -> list[Registration]:
    return list(db.scalars(select(Registration).where(Registration.event_id == event_id).order_by(Registration.id)))


def list_user_registrations(db: Session, user_id: int) -> list[Registration]:
    return list(db.scalars(select(Registration).where(Registration.user_id == user_id).order_by(Registration.id)))


def list_team_registrations(db: Session, team_id: str) -> list[Registration]:
    return list(db.scalars(select(Registration).where(Registration.team_id == team_id).order_by(Registration.id)))


def get_registration_attendance(db: Session, registration_id: int) -> Attendance | None:
    return db.scalar(select(Attendance).where(Attendance.registration_id == registration_id))


def get_event_attendance(db: Session, event_id: int) -> list[Attendance]:
    return list(db.scalars(select(Attendance).where(Attendance.event_id == event_id).order_by(Attendance.marked_at)))

"""
Test database models and their constraints.
"""
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.models.events import Event
from campus_events.models.photos import Photo, PhotoLike
from campus_events.models.registrations import Attendance, Registration


def _registration(event: Event, code: str, user_id=None, **extra) -> Registration:
    return Registration(
        event_id=event.id,
        user_id=user_id,
        participant_name="Asha",
        participant_email="asha@campus.edu",
        registration_code=code,
        **extra,
    )


class TestEventModel:
    """Test the Event model."""

    def test_create_event(self, db_session: Session, organizer):
        event = Event(
            title="Test Event",
            date=date(2030, 1, 15),
            time="09:30",
            location="Main Hall",
            category="Seminar",
            max_participants=100,
            organizer_id=organizer.id,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert event.id is not None
        assert event.is_team_event is False
        assert event.team_size is None
        assert event.description == ""
        assert event.created_at is not None

    def test_event_relationship_with_registrations(self, db_session: Session, make_event):
        event = make_event()
        db_session.add_all([_registration(event, "REG-AAAAAA", 1), _registration(event, "REG-BBBBBB", 2)])
        db_session.commit()
        db_session.refresh(event)

        assert len(event.registrations) == 2
        assert all(r.event_id == event.id for r in event.registrations)


class TestRegistrationModel:
    """Test the Registration model."""

    def test_registration_code_is_unique(self, db_session: Session, make_event):
        event = make_event()
        db_session.add_all([_registration(event, "REG-AAAAAA", 1), _registration(event, "REG-AAAAAA", 2)])

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_one_registration_per_user_and_event(self, db_session: Session, make_event, participant):
        event = make_event()
        db_session.add_all(
            [_registration(event, "REG-AAAAAA", participant.id), _registration(event, "REG-BBBBBB", participant.id)]
        )

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_team_members_without_account_do_not_collide(self, db_session: Session, make_event):
        event = make_event(is_team_event=True, team_size=3)
        db_session.add_all(
            [
                _registration(event, "REG-AAAAAA", None, team_id="TEAM-1"),
                _registration(event, "REG-BBBBBB", None, team_id="TEAM-1"),
            ]
        )
        db_session.commit()

        assert db_session.query(Registration).filter(Registration.team_id == "TEAM-1").count() == 2


class TestAttendanceModel:
    """Test the Attendance model."""

    def test_one_attendance_per_registration(self, db_session: Session, make_event, organizer):
        event = make_event()
        registration = _registration(event, "REG-AAAAAA", 1)
        db_session.add(registration)
        db_session.commit()

        db_session.add_all(
            [
                Attendance(registration_id=registration.id, event_id=event.id, marked_by=organizer.id),
                Attendance(registration_id=registration.id, event_id=event.id, marked_by=organizer.id),
            ]
        )
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_attendance_defaults(self, db_session: Session, make_event, organizer):
        event = make_event()
        registration = _registration(event, "REG-AAAAAA", 1)
        db_session.add(registration)
        db_session.commit()

        attendance = Attendance(registration_id=registration.id, event_id=event.id, marked_by=organizer.id)
        db_session.add(attendance)
        db_session.commit()
        db_session.refresh(attendance)

        assert attendance.status == "Present"
        assert attendance.marked_at is not None


class TestPhotoLikeModel:
    """Test the PhotoLike model."""

    def test_like_once_per_user(self, db_session: Session, make_event, participant):
        event = make_event()
        photo = Photo(event_id=event.id, uploaded_by_user_id=participant.id, uploaded_by_name="Asha", storage_id="x")
        db_session.add(photo)
        db_session.commit()

        db_session.add_all(
            [PhotoLike(photo_id=photo.id, user_id=participant.id), PhotoLike(photo_id=photo.id, user_id=participant.id)]
        )
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

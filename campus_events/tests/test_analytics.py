"""
Test organizer analytics and participant history.
"""
from datetime import date, datetime, timedelta
from itertools import count

import pytest
from sqlalchemy.orm import Session

from campus_events.models.registrations import Attendance, Registration
from campus_events.services import analytics, history

TODAY = date(2026, 3, 15)

_codes = count(1)


def _add_registration(db: Session, event, created_at: datetime, user_id=None, attended_by=None) -> Registration:
    registration = Registration(
        event_id=event.id,
        user_id=user_id,
        participant_name="Guest",
        participant_email="guest@campus.edu",
        registration_code=f"REG-T{next(_codes):05d}",
        created_at=created_at,
    )
    db.add(registration)
    db.flush()
    if attended_by is not None:
        db.add(Attendance(registration_id=registration.id, event_id=event.id, marked_by=attended_by))
    db.commit()
    return registration


class TestPercentage:
    @pytest.mark.parametrize(
        "part, whole, expected",
        [
            (0, 0, 0),
            (5, 0, 0),
            (0, 7, 0),
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),  # 12.5 rounds up
            (1, 200, 1),  # 0.5 rounds up
            (7, 7, 100),
        ],
    )
    def test_half_up_rounding(self, part, whole, expected):
        assert analytics.percentage(part, whole) == expected


class TestOrganizerSummary:
    def test_empty_organizer(self, db_session: Session, organizer):
        summary = analytics.get_organizer_summary(db_session, organizer.id, today=TODAY)

        assert summary == {
            "total_events": 0,
            "total_registrations": 0,
            "total_attendance": 0,
            "attendance_rate": 0,
            "upcoming_events": 0,
        }

    def test_summary_counts(self, db_session: Session, organizer, make_event):
        past = make_event(title="Past", date=TODAY - timedelta(days=3))
        today = make_event(title="Today", date=TODAY)
        make_event(title="Later", date=TODAY + timedelta(days=20))
        stamp = datetime(2026, 3, 1, 9, 0)
        _add_registration(db_session, past, stamp, attended_by=organizer.id)
        _add_registration(db_session, past, stamp, attended_by=organizer.id)
        _add_registration(db_session, past, stamp)
        _add_registration(db_session, today, stamp)

        summary = analytics.get_organizer_summary(db_session, organizer.id, today=TODAY)

        assert summary["total_events"] == 3
        assert summary["total_registrations"] == 4
        assert summary["total_attendance"] == 2
        assert summary["attendance_rate"] == 50
        assert summary["upcoming_events"] == 2


class TestRegistrationTrends:
    def test_no_events(self, db_session: Session, organizer):
        assert analytics.get_registration_trends(db_session, organizer.id, today=TODAY) == []

    def test_thirty_zero_filled_days(self, db_session: Session, make_event, organizer):
        event = make_event()
        _add_registration(db_session, event, datetime(2026, 3, 15, 8, 30))
        _add_registration(db_session, event, datetime(2026, 3, 15, 22, 0))
        _add_registration(db_session, event, datetime(2026, 2, 14, 12, 0))
        # Outside the window on both sides
        _add_registration(db_session, event, datetime(2026, 2, 13, 23, 59))
        _add_registration(db_session, event, datetime(2026, 3, 16, 0, 1))

        trends = analytics.get_registration_trends(db_session, organizer.id, today=TODAY)

        assert len(trends) == 30
        assert trends[0]["date"] == date(2026, 2, 14)
        assert trends[0]["count"] == 1
        assert trends[0]["label"] == "Feb 14"
        assert trends[-1] == {"date": TODAY, "count": 2, "label": "Mar 15"}
        assert sum(day["count"] for day in trends) == 3


class TestCategoryStats:
    def test_only_used_categories(self, db_session: Session, make_event):
        workshop = make_event(category="Workshop")
        make_event(category="Workshop", title="Second")
        hackathon = make_event(category="Hackathon", is_team_event=True, team_size=2)
        _add_registration(db_session, workshop, datetime(2026, 3, 1))
        _add_registration(db_session, hackathon, datetime(2026, 3, 1))
        _add_registration(db_session, hackathon, datetime(2026, 3, 1))

        stats = analytics.get_category_stats(db_session, workshop.organizer_id)

        assert stats == [
            {"category": "Workshop", "event_count": 2, "registration_count": 1},
            {"category": "Hackathon", "event_count": 1, "registration_count": 2},
        ]


class TestAttendanceRates:
    def test_rates_sorted_by_date_descending(self, db_session: Session, make_event, organizer):
        older = make_event(title="Older", date=date(2026, 1, 10))
        newer = make_event(title="Newer", date=date(2026, 2, 10))
        empty = make_event(title="Empty", date=date(2026, 1, 20))
        for attended in (True, True, False):
            _add_registration(db_session, older, datetime(2026, 1, 1), attended_by=organizer.id if attended else None)
        _add_registration(db_session, newer, datetime(2026, 1, 1), attended_by=organizer.id)

        rates = analytics.get_attendance_rates(db_session, organizer.id)

        assert [row["event_id"] for row in rates] == [newer.id, empty.id, older.id]
        assert rates[0]["rate"] == 100
        assert rates[1]["rate"] == 0
        assert rates[1]["registrations"] == 0
        assert rates[2]["rate"] == 67


class TestPeakTimes:
    def test_no_events(self, db_session: Session, organizer):
        assert analytics.get_peak_registration_times(db_session, organizer.id) == []

    def test_hour_buckets(self, db_session: Session, make_event, organizer):
        event = make_event()
        for minute in (0, 15, 45):
            _add_registration(db_session, event, datetime(2026, 3, 1, 14, minute))
        _add_registration(db_session, event, datetime(2026, 3, 2, 9, 5))

        peaks = analytics.get_peak_registration_times(db_session, organizer.id)

        assert len(peaks) == 24
        assert peaks[14] == {"hour": 14, "count": 3, "label": "14:00", "percentage": 100}
        assert peaks[9]["count"] == 1
        assert peaks[9]["percentage"] == 33
        assert peaks[0] == {"hour": 0, "count": 0, "label": "00:00", "percentage": 0}

    def test_events_without_registrations(self, db_session: Session, make_event, organizer):
        make_event()

        peaks = analytics.get_peak_registration_times(db_session, organizer.id)

        assert all(bucket["count"] == 0 and bucket["percentage"] == 0 for bucket in peaks)


class TestParticipantHistory:
    def test_history_and_stats(self, db_session: Session, make_event, organizer, participant):
        workshop = make_event(title="Workshop", category="Workshop", date=date(2026, 1, 5))
        seminar = make_event(title="Seminar", category="Seminar", date=date(2026, 2, 5))
        sports = make_event(title="Sports", category="Sports", date=date(2026, 3, 5))
        _add_registration(db_session, workshop, datetime(2026, 1, 1), user_id=participant.id, attended_by=organizer.id)
        _add_registration(db_session, seminar, datetime(2026, 1, 1), user_id=participant.id, attended_by=organizer.id)
        _add_registration(db_session, sports, datetime(2026, 1, 1), user_id=participant.id)

        items = history.get_attendance_history(db_session, participant.id)

        assert [item["event_title"] for item in items] == ["Sports", "Seminar", "Workshop"]
        assert [item["attended"] for item in items] == [False, True, True]
        assert items[0]["attended_at"] is None

        stats = history.get_participant_stats(db_session, participant.id)

        assert stats["total_registrations"] == 3
        assert stats["total_attended"] == 2
        assert stats["attendance_rate"] == 67
        assert stats["category_counts"] == {"Workshop": 1, "Seminar": 1}

    def test_stats_without_registrations(self, db_session: Session, participant):
        stats = history.get_participant_stats(db_session, participant.id)

        assert stats["total_registrations"] == 0
        assert stats["attendance_rate"] == 0
        assert stats["top_category"] is None

    def test_stats_after_event_deleted(self, db_session: Session, make_event, organizer, participant):
        from campus_events.services import events

        kept = make_event(title="Kept", category="Seminar")
        dropped = make_event(title="Dropped", category="Sports")
        _add_registration(db_session, kept, datetime(2026, 1, 1), user_id=participant.id, attended_by=organizer.id)
        _add_registration(db_session, dropped, datetime(2026, 1, 1), user_id=participant.id)

        events.delete_event(db_session, event_id=dropped.id, user_id=organizer.id)

        stats = history.get_participant_stats(db_session, participant.id)
        assert stats["total_registrations"] == 1
        assert stats["total_attended"] == 1
        assert stats["attendance_rate"] == 100
        assert [item["event_title"] for item in history.get_attendance_history(db_session, participant.id)] == ["Kept"]

"""
Read-only aggregation over an organizer's events.

Every call scans the raw registration and attendance rows; nothing is
materialized.
"""
from datetime import date, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_events.database.db import utcnow
from campus_events.models.events import EventCategory
from campus_events.models.registrations import Registration
from campus_events.services.events import list_events_by_organizer
from campus_events.services.registrations import count_event_attendance, count_event_registrations

TREND_DAYS = 30


def percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half up."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (2 * whole)


def attendance_rate(attendance: int, registrations: int) -> int:
    """Percentage of registrations that attended, 0 when nobody registered."""
    return percentage(attendance, registrations)


def _registration_times(db: Session, event_ids: list[int]) -> list[datetime]:
    if not event_ids:
        return []
    return list(db.scalars(select(Registration.created_at).where(Registration.event_id.in_(event_ids))))


def get_organizer_summary(db: Session, organizer_id: int, today: date | None = None) -> dict:
    today = today or utcnow().date()
    events = list_events_by_organizer(db, organizer_id)

    total_registrations = 0
    total_attendance = 0
    for event in events:
        total_registrations += count_event_registrations(db, event.id)
        total_attendance += count_event_attendance(db, event.id)

    return {
        "total_events": len(events),
        "total_registrations": total_registrations,
        "total_attendance": total_attendance,
        "attendance_rate": attendance_rate(total_attendance, total_registrations),
        "upcoming_events": sum(1 for event in events if event.date >= today),
    }


def get_registration_trends(db: Session, organizer_id: int, today: date | None = None) -> list[dict]:
    """Daily registration counts for the 30 days ending today, zero-filled."""
    today = today or utcnow().date()
    events = list_events_by_organizer(db, organizer_id)
    if not events:
        return []

    start = today - timedelta(days=TREND_DAYS - 1)
    daily_counts = {start + timedelta(days=i): 0 for i in range(TREND_DAYS)}

    for created_at in _registration_times(db, [event.id for event in events]):
        day = created_at.date()
        if day in daily_counts:
            daily_counts[day] += 1

    return [
        {"date": day, "count": count, "label": f"{day:%b} {day.day}"}
        for day, count in sorted(daily_counts.items())
    ]


def get_category_stats(db: Session, organizer_id: int) -> list[dict]:
    events = list_events_by_organizer(db, organizer_id)
    stats = []
    for category in EventCategory:
        category_events = [event for event in events if event.category == category.value]
        registration_count = sum(count_event_registrations(db, event.id) for event in category_events)
        if category_events or registration_count:
            stats.append(
                {
                    "category": category.value,
                    "event_count": len(category_events),
                    "registration_count": registration_count,
                }
            )
    return stats


def get_attendance_rates(db: Session, organizer_id: int) -> list[dict]:
    """Per-event attendance, most recent event first."""
    rows = []
    for event in list_events_by_organizer(db, organizer_id):
        registrations = count_event_registrations(db, event.id)
        attendance = count_event_attendance(db, event.id)
        rows.append(
            {
                "event_id": event.id,
                "title": event.title,
                "registrations": registrations,
                "attendance": attendance,
                "rate": attendance_rate(attendance, registrations),
                "date": event.date,
            }
        )
    return sorted(rows, key=lambda row: row["date"], reverse=True)


def get_peak_registration_times(db: Session, organizer_id: int) -> list[dict]:
    """Registrations per hour of day (UTC), scaled against the busiest hour."""
    events = list_events_by_organizer(db, organizer_id)
    if not events:
        return []

    hourly_counts = [0] * 24
    for created_at in _registration_times(db, [event.id for event in events]):
        hourly_counts[created_at.hour] += 1

    max_count = max(max(hourly_counts), 1)
    return [
        {
            "hour": hour,
            "count": count,
            "label": f"{hour:02d}:00",
            "percentage": percentage(count, max_count),
        }
        for hour, count in enumerate(hourly_counts)
    ]

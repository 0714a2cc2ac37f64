from collections import Counter

from sqlalchemy.orm import Session

from campus_events.models.events import Event
from campus_events.services.analytics import attendance_rate
from campus_events.services.registrations import get_registration_attendance, list_user_registrations


def get_attendance_history(db: Session, user_id: int) -> list[dict]:
    """A participant's registrations with event details, latest event first."""
    items = []
    for registration in list_user_registrations(db, user_id):
        event = db.get(Event, registration.event_id)
        if not event:
            continue
        attendance = get_registration_attendance(db, registration.id)
        items.append(
            {
                "registration_id": registration.id,
                "registration_code": registration.registration_code,
                "event_id": event.id,
                "event_title": event.title,
                "event_date": event.date,
                "event_time": event.time,
                "event_location": event.location,
                "event_category": event.category,
                "is_team_event": event.is_team_event,
                "team_name": registration.team_name,
                "is_team_leader": registration.is_team_leader,
                "attended": attendance is not None,
                "attended_at": attendance.marked_at if attendance else None,
            }
        )
    return sorted(items, key=lambda item: item["event_date"], reverse=True)


def get_participant_stats(db: Session, user_id: int) -> dict:
    registrations = list_user_registrations(db, user_id)
    attended = 0
    categories: Counter[str] = Counter()

    # Rows of a deleted event still count as registrations; event deletion
    # cascades to them, so this only matters for data written outside the API
    for registration in registrations:
        event = db.get(Event, registration.event_id)
        if not event:
            continue
        if get_registration_attendance(db, registration.id):
            attended += 1
            categories[event.category] += 1

    top = categories.most_common(1)
    return {
        "total_registrations": len(registrations),
        "total_attended": attended,
        "attendance_rate": attendance_rate(attended, len(registrations)),
        "top_category": top[0][0] if top else None,
        "category_counts": dict(categories),
    }

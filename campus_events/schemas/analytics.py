import datetime as dt

from pydantic import BaseModel


class OrganizerSummaryOut(BaseModel):
    total_events: int
    total_registrations: int
    total_attendance: int
    attendance_rate: int
    upcoming_events: int


class TrendPointOut(BaseModel):
    date: dt.date
    count: int
    label: str


class CategoryStatOut(BaseModel):
    category: str
    event_count: int
    registration_count: int


class EventAttendanceRateOut(BaseModel):
    event_id: int
    title: str
    registrations: int
    attendance: int
    rate: int
    date: dt.date


class HourBucketOut(BaseModel):
    hour: int
    count: int
    label: str
    percentage: int

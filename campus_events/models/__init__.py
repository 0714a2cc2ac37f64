# Import models so that they register with Base.metadata
from campus_events.models.users import User, UserRole  # noqa: F401
from campus_events.models.events import Event, EventCategory  # noqa: F401
from campus_events.models.registrations import Attendance, AttendanceStatus, Registration  # noqa: F401
from campus_events.models.otp import OtpCode  # noqa: F401
from campus_events.models.announcements import Announcement, AnnouncementPriority  # noqa: F401
from campus_events.models.discussions import (  # noqa: F401
    Comment,
    Discussion,
    DiscussionType,
    Report,
    ReportContentType,
    ReportStatus,
)
from campus_events.models.photos import Photo, PhotoLike  # noqa: F401

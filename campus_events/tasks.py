import structlog

from campus_events.core.celery_config import celery_app
from campus_events.database.db import SessionLocal
from campus_events.services.auth import purge_expired_otps

logger = structlog.get_logger(__name__)


@celery_app.task(bind=True)
def deliver_otp_task(self, email: str, code: str):
    """Deliver a sign-in code to the organizer's inbox."""
    # Mail transport is deployment specific; the code itself never reaches the log
    logger.info("Delivering OTP", email=email, code_length=len(code), task_id=self.request.id)
    return {"email": email, "delivered": True}


@celery_app.task(bind=True)
def purge_expired_otps_task(self):
    """Delete OTP codes whose TTL has passed."""
    db = SessionLocal()
    try:
        return purge_expired_otps(db)
    finally:
        db.close()

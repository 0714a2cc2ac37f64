"""
One-time passcodes for organizer sign-in.

At most one live code exists per email. A code is consumed by a successful
verification and deleted when found expired.
"""
import secrets
from datetime import timedelta

import structlog
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from campus_events.core import config
from campus_events.core.errors import ExpiredError, NotFoundError, ValidationFailedError
from campus_events.database.db import transaction, utcnow
from campus_events.models.otp import OtpCode

logger = structlog.get_logger(__name__)


def generate_otp() -> str:
    """6-digit numeric code without a leading zero."""
    return str(100000 + secrets.randbelow(900000))


def send_otp(db: Session, *, email: str) -> OtpCode:
    code = generate_otp()
    expires_at = utcnow() + timedelta(minutes=config.OTP_TTL_MINUTES)

    with transaction(db):
        # Replace any live code for this email
        db.execute(delete(OtpCode).where(OtpCode.email == email))
        otp = OtpCode(email=email, code=code, expires_at=expires_at)
        db.add(otp)
        db.flush()

    logger.info("OTP issued", email=email, expires_at=expires_at.isoformat())
    return otp


def verify_otp(db: Session, *, email: str, code: str) -> None:
    otp = db.scalar(select(OtpCode).where(OtpCode.email == email))
    if not otp:
        raise NotFoundError("No OTP found for this email")

    if otp.expires_at < utcnow():
        with transaction(db):
            db.delete(otp)
        logger.warning("OTP expired", email=email)
        raise ExpiredError("OTP has expired")

    if otp.code != code:
        logger.warning("OTP mismatch", email=email)
        raise ValidationFailedError("Invalid OTP")

    with transaction(db):
        db.delete(otp)
    logger.info("OTP verified", email=email)


def purge_expired_otps(db: Session) -> int:
    with transaction(db):
        result = db.execute(delete(OtpCode).where(OtpCode.expires_at < utcnow()))
    purged = result.rowcount or 0
    if purged:
        logger.info("Purged expired OTP codes", count=purged)
    return purged

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_events.database.db import get_db
from campus_events.schemas.auth import SendOtpRequest, SuccessOut, VerifyOtpRequest
from campus_events.services import auth
from campus_events.tasks import deliver_otp_task

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/otp/send", response_model=SuccessOut)
def send_otp(payload: SendOtpRequest, db: Session = Depends(get_db)):
    otp = auth.send_otp(db, email=payload.email)

    # hand delivery to the worker; the code is already stored either way
    try:
        deliver_otp_task.delay(otp.email, otp.code)
    except Exception:
        logger.exception("Could not enqueue OTP delivery", email=otp.email)

    return {"success": True}


@router.post("/otp/verify", response_model=SuccessOut)
def verify_otp(payload: VerifyOtpRequest, db: Session = Depends(get_db)):
    auth.verify_otp(db, email=payload.email, code=payload.code)
    return {"success": True}

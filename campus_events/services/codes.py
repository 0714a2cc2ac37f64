import secrets
import time

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_events.core.errors import ConflictError
from campus_events.models.registrations import Registration

# Uppercase letters and digits without the look-alikes 0, O, 1 and I
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6
CODE_PREFIX = "REG-"
MAX_CODE_ATTEMPTS = 10


def generate_registration_code() -> str:
    return CODE_PREFIX + "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def generate_unique_registration_code(db: Session, taken: set[str] | None = None) -> str:
    """
    Draw codes until one is unused, both in the table and in ``taken``
    (codes minted earlier in the same, not yet flushed, batch).
    """
    taken = taken or set()
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_registration_code()
        if code in taken:
            continue
        exists = db.scalar(select(Registration.id).where(Registration.registration_code == code))
        if exists is None:
            return code
    raise ConflictError("Could not generate a unique registration code, please try again.")


def generate_team_id() -> str:
    return f"TEAM-{int(time.time() * 1000)}-{secrets.token_hex(4)}"

import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./campus_events.db")

# Files uploaded through the blob store are served from STATIC_DIR/uploads
STATIC_DIR = os.getenv("STATIC_DIR", "static")

OTP_TTL_MINUTES = int(os.getenv("OTP_TTL_MINUTES", "10"))
UPLOAD_TICKET_TTL_SECONDS = int(os.getenv("UPLOAD_TICKET_TTL_SECONDS", "3600"))

# Per-event registration lock
REGISTRATION_LOCK_TIMEOUT = float(os.getenv("REGISTRATION_LOCK_TIMEOUT", "10"))
REGISTRATION_LOCK_WAIT = float(os.getenv("REGISTRATION_LOCK_WAIT", "5"))

CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "0").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]


def get_database_url():
    return DATABASE_URL


def get_static_dir():
    return STATIC_DIR


def get_upload_dir():
    return os.path.join(STATIC_DIR, "uploads")

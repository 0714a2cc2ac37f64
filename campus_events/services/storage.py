"""
Blob storage for event photos.

Clients ask for an upload URL, send the bytes there directly, and keep only
the returned storage id. Files are written under the static upload directory
and served from ``/static/uploads``. Pending upload tickets live in Redis
and expire after ``UPLOAD_TICKET_TTL_SECONDS``.
"""
import os
import re
import uuid

import structlog

from campus_events.core import config, redis_config
from campus_events.core.errors import NotFoundError, ValidationFailedError

logger = structlog.get_logger(__name__)

UPLOAD_ROUTE = "/storage/upload"
PUBLIC_PREFIX = "/static/uploads"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

_STORAGE_ID = re.compile(r"^[0-9a-f]{32}$")


def _ticket_key(storage_id: str) -> str:
    return f"upload_ticket:{storage_id}"


def _path(storage_id: str) -> str:
    if not _STORAGE_ID.match(storage_id):
        raise NotFoundError("File not found")
    return os.path.join(config.get_upload_dir(), storage_id)


def generate_upload_url() -> tuple[str, str]:
    """Mint a storage id and return ``(storage_id, upload_url)``."""
    storage_id = uuid.uuid4().hex
    redis_client = redis_config.get_redis_client()
    redis_client.set(_ticket_key(storage_id), "pending", ex=config.UPLOAD_TICKET_TTL_SECONDS)
    return storage_id, f"{UPLOAD_ROUTE}/{storage_id}"


def store_upload(storage_id: str, data: bytes) -> None:
    if not data:
        raise ValidationFailedError("Upload is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise ValidationFailedError("Upload is too large")

    # Deleting the ticket claims it; a second upload on the same URL finds nothing
    redis_client = redis_config.get_redis_client()
    if not redis_client.delete(_ticket_key(storage_id)):
        raise NotFoundError("Upload URL is invalid or has expired")

    path = _path(storage_id)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as fh:
        fh.write(data)
    logger.info("Blob stored", storage_id=storage_id, size=len(data))


def get_url(storage_id: str) -> str | None:
    try:
        path = _path(storage_id)
    except NotFoundError:
        return None
    if not os.path.exists(path):
        return None
    return f"{PUBLIC_PREFIX}/{storage_id}"


def delete(storage_id: str) -> bool:
    try:
        path = _path(storage_id)
    except NotFoundError:
        return False
    if not os.path.exists(path):
        return False
    os.remove(path)
    logger.info("Blob deleted", storage_id=storage_id)
    return True

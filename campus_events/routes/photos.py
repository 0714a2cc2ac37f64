from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from campus_events.core.errors import ValidationFailedError
from campus_events.database.db import get_db
from campus_events.schemas.auth import SuccessOut
from campus_events.schemas.photos import LikeResult, PhotoCreate, PhotoOut, StorageUrlOut, UploadUrlOut
from campus_events.services import photos, storage

router = APIRouter(prefix="/photos", tags=["photos"])
storage_router = APIRouter(prefix="/storage", tags=["storage"])


@router.post("", response_model=PhotoOut)
def upload_photo(payload: PhotoCreate, db: Session = Depends(get_db)):
    return photos.upload_photo(db, **payload.model_dump())


@router.get("/event/{event_id}", response_model=List[PhotoOut])
def list_event_photos(event_id: int, db: Session = Depends(get_db)):
    return photos.list_event_photos(db, event_id)


@router.post("/{photo_id}/like", response_model=LikeResult)
def toggle_like(photo_id: int, user_id: int, db: Session = Depends(get_db)):
    liked = photos.toggle_like(db, photo_id=photo_id, user_id=user_id)
    return {"success": True, "liked": liked}


@router.get("/{photo_id}/liked")
def has_liked(photo_id: int, user_id: int, db: Session = Depends(get_db)):
    return {"liked": photos.has_liked(db, photo_id=photo_id, user_id=user_id)}


@router.delete("/{photo_id}", response_model=SuccessOut)
def delete_photo(photo_id: int, user_id: int, db: Session = Depends(get_db)):
    photos.delete_photo(db, photo_id=photo_id, user_id=user_id)
    return {"success": True}


@storage_router.post("/upload-url", response_model=UploadUrlOut)
def generate_upload_url():
    storage_id, upload_url = storage.generate_upload_url()
    return {"storage_id": storage_id, "upload_url": upload_url}


@storage_router.api_route("/upload/{storage_id}", methods=["PUT", "POST"], response_model=StorageUrlOut)
async def upload_blob(storage_id: str, request: Request):
    """Raw request body is the file content."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > storage.MAX_UPLOAD_BYTES:
        raise ValidationFailedError("Upload is too large")

    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > storage.MAX_UPLOAD_BYTES:
            raise ValidationFailedError("Upload is too large")
        chunks.append(chunk)

    # Redis and disk writes block; keep them off the event loop
    await run_in_threadpool(storage.store_upload, storage_id, b"".join(chunks))
    return {"storage_id": storage_id, "url": storage.get_url(storage_id)}


@storage_router.get("/{storage_id}", response_model=StorageUrlOut)
def get_blob_url(storage_id: str):
    return {"storage_id": storage_id, "url": storage.get_url(storage_id)}


@storage_router.delete("/{storage_id}", response_model=SuccessOut)
def delete_blob(storage_id: str):
    return {"success": storage.delete(storage_id)}

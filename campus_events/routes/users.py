from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campus_events.database.db import get_db
from campus_events.schemas.users import AnonymousUserCreate, OrganizerUserCreate, UserIdOut, UserOut
from campus_events.services import users

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/anonymous", response_model=UserIdOut)
def create_anonymous_user(payload: AnonymousUserCreate, db: Session = Depends(get_db)):
    user = users.create_anonymous_user(db, name=payload.name)
    return {"id": user.id}


@router.post("/organizer", response_model=UserIdOut)
def create_organizer_user(payload: OrganizerUserCreate, db: Session = Depends(get_db)):
    user = users.create_organizer_user(db, email=payload.email)
    return {"id": user.id}


@router.get("/by-email", response_model=UserOut)
def get_user_by_email(email: str, db: Session = Depends(get_db)):
    user = users.get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = users.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

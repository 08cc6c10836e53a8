# api/routers/profiles.py
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from api.deps import get_current_user, get_db
from api.routers.utils import commit_or_http
from api.schemas.profiles import ProfileOut, ProfileUpdate
from db.models import Profile

router = APIRouter(tags=["profiles"])


@router.get("/users", response_model=list[ProfileOut])
def list_users(
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    # unnamed users sort last
    rows = (
        db.query(Profile)
        .order_by(Profile.display_name.is_(None), func.lower(Profile.display_name), Profile.id)
        .all()
    )
    return rows


@router.get("/profile", response_model=ProfileOut)
def get_profile(user: Profile = Depends(get_current_user)):
    return user


@router.patch("/profile", response_model=ProfileOut)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    user.display_name = payload.display_name
    user.biography = payload.biography
    commit_or_http(db, "Failed to update profile")
    db.refresh(user)
    return user

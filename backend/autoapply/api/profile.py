from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from autoapply.auth import get_current_user
from autoapply.database import get_db
from autoapply.models.profile import Profile
from autoapply.models.user import User
from autoapply.schemas.profile import ProfileOut, ProfileUpdate
from autoapply.services.profiles import get_profile, upsert_profile


router = APIRouter()


@router.get("/profile", response_model=ProfileOut | None)
def read_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Profile | None:
    return get_profile(db, current_user.id)


@router.put("/profile", response_model=ProfileOut)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Profile:
    return upsert_profile(db, current_user.id, payload)

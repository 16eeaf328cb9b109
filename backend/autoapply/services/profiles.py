from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from autoapply.models.profile import Profile
from autoapply.schemas.profile import ProfileUpdate


def get_profile(db: Session, user_id: int) -> Profile | None:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def upsert_profile(db: Session, user_id: int, payload: ProfileUpdate) -> Profile:
    changes = payload.model_dump(exclude_unset=True)
    if "skills" in changes:
        changes["skills"] = _dedupe(changes["skills"] or [])

    profile = get_profile(db, user_id)
    if profile is None:
        profile = Profile(user_id=user_id, skills=[])
    for key, value in changes.items():
        setattr(profile, key, value)
    profile.updated_at = datetime.utcnow()

    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def _dedupe(skills: list[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for skill in skills:
        cleaned = skill.strip()
        if not cleaned or cleaned.lower() in seen:
            continue
        seen.add(cleaned.lower())
        ordered.append(cleaned)
    return ordered

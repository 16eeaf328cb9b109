from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from autoapply.models.resume import Resume
from autoapply.schemas.resume import ResumeCreate, ResumeUpdate


def list_resumes(db: Session, user_id: int) -> list[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.is_default.desc(), Resume.updated_at.desc(), Resume.id.desc())
        .all()
    )


def get_resume(db: Session, resume_id: int) -> Resume | None:
    return db.query(Resume).filter(Resume.id == resume_id).first()


def get_default_resume(db: Session, user_id: int) -> Resume | None:
    return db.query(Resume).filter(Resume.user_id == user_id, Resume.is_default.is_(True)).first()


def _clear_default(db: Session, user_id: int, keep_id: int | None = None) -> None:
    query = db.query(Resume).filter(Resume.user_id == user_id, Resume.is_default.is_(True))
    if keep_id is not None:
        query = query.filter(Resume.id != keep_id)
    query.update({Resume.is_default: False}, synchronize_session="fetch")


def create_resume(db: Session, user_id: int, payload: ResumeCreate) -> Resume:
    # Clearing the old default and inserting the new one commit together.
    if payload.is_default:
        _clear_default(db, user_id)

    resume = Resume(
        user_id=user_id,
        title=payload.title,
        content=payload.content,
        is_default=payload.is_default,
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


def update_resume(db: Session, resume: Resume, payload: ResumeUpdate) -> Resume:
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if changes.get("is_default"):
        _clear_default(db, resume.user_id, keep_id=resume.id)

    for key, value in changes.items():
        setattr(resume, key, value)
    resume.updated_at = datetime.utcnow()
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


def delete_resume(db: Session, resume: Resume) -> None:
    db.delete(resume)
    db.commit()

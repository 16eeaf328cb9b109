from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from autoapply.auth import get_current_user
from autoapply.database import get_db
from autoapply.models.resume import Resume
from autoapply.models.user import User
from autoapply.schemas.base import MessageResponse
from autoapply.schemas.resume import ResumeCreate, ResumeOut, ResumeUpdate
from autoapply.services import resumes as resume_service


router = APIRouter()


def _owned_resume(db: Session, resume_id: int, user: User, action: str) -> Resume:
    resume = resume_service.get_resume(db, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    if resume.user_id != user.id:
        raise HTTPException(status_code=403, detail=f"Not authorized to {action} this resume")
    return resume


@router.get("", response_model=list[ResumeOut])
def list_resumes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Resume]:
    return resume_service.list_resumes(db, current_user.id)


@router.get("/{resume_id}", response_model=ResumeOut)
def get_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Resume:
    return _owned_resume(db, resume_id, current_user, "access")


@router.post("", response_model=ResumeOut, status_code=status.HTTP_201_CREATED)
def create_resume(
    payload: ResumeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Resume:
    return resume_service.create_resume(db, current_user.id, payload)


@router.put("/{resume_id}", response_model=ResumeOut)
def update_resume(
    resume_id: int,
    payload: ResumeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Resume:
    resume = _owned_resume(db, resume_id, current_user, "update")
    return resume_service.update_resume(db, resume, payload)


@router.delete("/{resume_id}", response_model=MessageResponse)
def delete_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    resume = _owned_resume(db, resume_id, current_user, "delete")
    resume_service.delete_resume(db, resume)
    return MessageResponse(message="Resume deleted successfully")

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from autoapply.auth import get_current_user
from autoapply.database import get_db
from autoapply.models.application import JobApplication
from autoapply.models.user import User
from autoapply.schemas.application import ApplicationOut, ApplyRequest, BatchApplyRequest, BatchApplyResponse
from autoapply.services.applications import ApplyError, apply_to_job, apply_to_jobs


router = APIRouter()


@router.post("/apply", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def apply(
    payload: ApplyRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobApplication:
    try:
        return apply_to_job(db, current_user, payload.job_id, resume_id=payload.resume_id, notes=payload.notes)
    except ApplyError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.post("/apply-batch", response_model=BatchApplyResponse, status_code=status.HTTP_201_CREATED)
def apply_batch(
    payload: BatchApplyRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BatchApplyResponse:
    results = apply_to_jobs(db, current_user, payload.job_ids, resume_id=payload.resume_id)
    return BatchApplyResponse.model_validate({"results": results}, from_attributes=True)

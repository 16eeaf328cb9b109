from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from autoapply.auth import get_current_user
from autoapply.database import get_db
from autoapply.models.application import JobApplication
from autoapply.models.enums import ApplicationStatus
from autoapply.models.user import User
from autoapply.schemas.application import (
    ApplicationCreate,
    ApplicationDetailOut,
    ApplicationOut,
    ApplicationUpdate,
)
from autoapply.services import applications as application_service
from autoapply.services.applications import ApplyError


router = APIRouter()


def application_detail(application: JobApplication) -> dict:
    job = application.job
    return {
        "application": application,
        "job": job,
        "company": job.company if job else None,
        "resume": application.resume,
    }


def _owned_application(db: Session, application_id: int, user: User, action: str) -> JobApplication:
    application = application_service.get_application(db, application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if application.user_id != user.id:
        raise HTTPException(status_code=403, detail=f"Not authorized to {action} this application")
    return application


@router.get("", response_model=list[ApplicationDetailOut])
def list_applications(
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[dict]:
    applications = application_service.list_applications(
        db,
        current_user.id,
        status=status_filter.value if status_filter else None,
    )
    return [application_detail(application) for application in applications]


@router.get("/recent", response_model=list[ApplicationDetailOut])
def recent_applications(
    limit: int = Query(default=application_service.DEFAULT_RECENT_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[dict]:
    applications = application_service.recent_applications(db, current_user.id, limit=limit)
    return [application_detail(application) for application in applications]


@router.get("/{application_id}", response_model=ApplicationDetailOut)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    return application_detail(_owned_application(db, application_id, current_user, "access"))


@router.post("", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def create_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobApplication:
    try:
        return application_service.apply_to_job(
            db,
            current_user,
            payload.job_id,
            resume_id=payload.resume_id,
            notes=payload.notes,
            status=payload.status,
        )
    except ApplyError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.put("/{application_id}", response_model=ApplicationOut)
def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobApplication:
    application = _owned_application(db, application_id, current_user, "update")
    if payload.resume_id is not None:
        try:
            application_service.resolve_resume_id(db, current_user, payload.resume_id)
        except ApplyError as exc:
            raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return application_service.update_application(db, application, payload)

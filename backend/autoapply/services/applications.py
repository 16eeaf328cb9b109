from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from autoapply.models.application import JobApplication
from autoapply.models.enums import NO_RESPONSE_STATUSES, ApplicationStatus
from autoapply.models.job import Job
from autoapply.models.resume import Resume
from autoapply.models.user import User
from autoapply.schemas.application import ApplicationUpdate
from autoapply.services.resumes import get_default_resume


logger = structlog.get_logger(__name__)

BATCH_NOTE = "Applied via batch auto-apply"
DEFAULT_RECENT_LIMIT = 5


class ApplyError(Exception):
    """A job application could not be submitted."""

    status_code = 400
    message = "Failed to apply"
    batch_message = "Failed to apply"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class JobNotFoundError(ApplyError):
    status_code = 404
    message = "Job not found"
    batch_message = "Job not found"


class AlreadyAppliedError(ApplyError):
    status_code = 409
    message = "You have already applied to this job"
    batch_message = "Already applied"


class ResumeNotFoundError(ApplyError):
    status_code = 404
    message = "Resume not found"
    batch_message = "Resume not found"


class ResumeForbiddenError(ApplyError):
    status_code = 403
    message = "Not authorized to use this resume"
    batch_message = "Not authorized to use this resume"


@dataclass
class BatchApplyResult:
    job_id: int
    success: bool
    application_id: int | None = None
    message: str | None = None


def resolve_resume_id(db: Session, user: User, resume_id: int | None) -> int | None:
    """The explicit resume if given (and owned), else the user's default, else None."""
    if resume_id is not None:
        resume = db.query(Resume).filter(Resume.id == resume_id).first()
        if not resume:
            raise ResumeNotFoundError()
        if resume.user_id != user.id:
            raise ResumeForbiddenError()
        return resume.id

    default = get_default_resume(db, user.id)
    return default.id if default else None


def has_applied(db: Session, user_id: int, job_id: int) -> bool:
    return (
        db.query(JobApplication.id)
        .filter(JobApplication.user_id == user_id, JobApplication.job_id == job_id)
        .first()
        is not None
    )


def _check_applicable(db: Session, user_id: int, job_id: int) -> None:
    if db.query(Job.id).filter(Job.id == job_id).first() is None:
        raise JobNotFoundError()
    if has_applied(db, user_id, job_id):
        raise AlreadyAppliedError()


def _submit(
    db: Session,
    user: User,
    job_id: int,
    resume_id: int | None,
    notes: str | None,
    status: ApplicationStatus,
) -> JobApplication:
    now = datetime.utcnow()
    application = JobApplication(
        user_id=user.id,
        job_id=job_id,
        resume_id=resume_id,
        notes=notes,
        status=ApplicationStatus(status).value,
        application_date=now,
        last_status_update=now,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent submission for the same job.
        db.rollback()
        raise AlreadyAppliedError()
    db.refresh(application)
    return application


def apply_to_job(
    db: Session,
    user: User,
    job_id: int,
    resume_id: int | None = None,
    notes: str | None = None,
    status: ApplicationStatus = ApplicationStatus.APPLIED,
) -> JobApplication:
    _check_applicable(db, user.id, job_id)
    resolved_resume_id = resolve_resume_id(db, user, resume_id)
    application = _submit(db, user, job_id, resolved_resume_id, notes, status)
    logger.info("application_created", user_id=user.id, job_id=job_id, application_id=application.id)
    return application


def apply_to_jobs(
    db: Session,
    user: User,
    job_ids: list[int],
    resume_id: int | None = None,
    notes: str = BATCH_NOTE,
) -> list[BatchApplyResult]:
    """Apply to each job independently; one failure never aborts the rest."""
    try:
        resolved_resume_id = resolve_resume_id(db, user, resume_id)
    except ApplyError as exc:
        logger.info("batch_apply_resume_rejected", user_id=user.id, resume_id=resume_id, reason=exc.batch_message)
        return [BatchApplyResult(job_id=job_id, success=False, message=exc.batch_message) for job_id in job_ids]

    results: list[BatchApplyResult] = []
    submitted: set[int] = set()
    for job_id in job_ids:
        if job_id in submitted:
            results.append(BatchApplyResult(job_id=job_id, success=False, message=AlreadyAppliedError.batch_message))
            continue
        try:
            _check_applicable(db, user.id, job_id)
            application = _submit(db, user, job_id, resolved_resume_id, notes, ApplicationStatus.APPLIED)
        except ApplyError as exc:
            results.append(BatchApplyResult(job_id=job_id, success=False, message=exc.batch_message))
            continue
        except SQLAlchemyError:
            db.rollback()
            logger.exception("batch_apply_item_failed", user_id=user.id, job_id=job_id)
            results.append(BatchApplyResult(job_id=job_id, success=False, message=ApplyError.batch_message))
            continue
        submitted.add(job_id)
        results.append(BatchApplyResult(job_id=job_id, success=True, application_id=application.id))

    logger.info(
        "batch_apply_finished",
        user_id=user.id,
        requested=len(job_ids),
        succeeded=sum(1 for result in results if result.success),
    )
    return results


def _detailed_query(db: Session):
    return db.query(JobApplication).options(
        joinedload(JobApplication.job).joinedload(Job.company),
        joinedload(JobApplication.resume),
    )


def list_applications(db: Session, user_id: int, status: str | None = None) -> list[JobApplication]:
    query = _detailed_query(db).filter(JobApplication.user_id == user_id)
    if status:
        query = query.filter(JobApplication.status == status)
    return query.order_by(JobApplication.application_date.desc(), JobApplication.id.desc()).all()


def recent_applications(db: Session, user_id: int, limit: int = DEFAULT_RECENT_LIMIT) -> list[JobApplication]:
    return (
        _detailed_query(db)
        .filter(JobApplication.user_id == user_id)
        .order_by(JobApplication.application_date.desc(), JobApplication.id.desc())
        .limit(limit)
        .all()
    )


def get_application(db: Session, application_id: int) -> JobApplication | None:
    return _detailed_query(db).filter(JobApplication.id == application_id).first()


def update_application(db: Session, application: JobApplication, payload: ApplicationUpdate) -> JobApplication:
    """Apply a partial update. Any status may follow any other status."""
    changes = payload.model_dump(exclude_unset=True)
    now = datetime.utcnow()

    status = changes.get("status")
    if status is not None and ApplicationStatus(status).value != application.status:
        application.status = ApplicationStatus(status).value
        application.last_status_update = now
    if "notes" in changes:
        application.notes = changes["notes"]
    if "resume_id" in changes:
        application.resume_id = changes["resume_id"]
    application.updated_at = now

    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def application_stats(db: Session, user_id: int) -> dict[str, int]:
    statuses = [row.status for row in db.query(JobApplication.status).filter(JobApplication.user_id == user_id).all()]
    counts = Counter(statuses)

    total = len(statuses)
    responses = sum(count for status, count in counts.items() if status not in NO_RESPONSE_STATUSES)
    interviews = counts.get(ApplicationStatus.INTERVIEW_SCHEDULED.value, 0)
    # Half-up rounding, so 12.5% reports as 13.
    success_rate = math.floor(interviews / total * 100 + 0.5) if total else 0
    return {
        "total_applications": total,
        "responses_received": responses,
        "interviews_scheduled": interviews,
        "success_rate": success_rate,
    }

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from autoapply.database import get_db
from autoapply.models.enums import ExperienceLevel, JobType
from autoapply.models.job import Job
from autoapply.schemas.job import JobOut
from autoapply.services.job_search import DEFAULT_PAGE_SIZE, JobFilters, get_job, search_jobs


router = APIRouter()


@router.get("", response_model=list[JobOut])
def list_jobs(
    title: str | None = Query(default=None),
    location: str | None = Query(default=None),
    experience_level: ExperienceLevel | None = Query(default=None, alias="experienceLevel"),
    job_type: JobType | None = Query(default=None, alias="jobType"),
    is_easy_apply: bool | None = Query(default=None, alias="isEasyApply"),
    date_posted: str | None = Query(default=None, alias="datePosted"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db),
) -> list[Job]:
    filters = JobFilters(
        title=title,
        location=location,
        experience_level=experience_level.value if experience_level else None,
        job_type=job_type.value if job_type else None,
        is_easy_apply=is_easy_apply,
        date_posted=date_posted,
    )
    return search_jobs(db, filters, page=page, limit=limit)


@router.get("/{job_id}", response_model=JobOut)
def read_job(job_id: int, db: Session = Depends(get_db)) -> Job:
    job = get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job

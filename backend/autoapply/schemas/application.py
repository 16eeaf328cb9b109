from __future__ import annotations

from datetime import datetime

from pydantic import Field

from autoapply.models.enums import ApplicationStatus
from autoapply.schemas.base import CamelModel
from autoapply.schemas.job import CompanyOut, JobOut
from autoapply.schemas.resume import ResumeOut


class ApplicationCreate(CamelModel):
    job_id: int
    resume_id: int | None = None
    status: ApplicationStatus = ApplicationStatus.APPLIED
    notes: str | None = None


class ApplicationUpdate(CamelModel):
    status: ApplicationStatus | None = None
    notes: str | None = None
    resume_id: int | None = None


class ApplyRequest(CamelModel):
    job_id: int
    resume_id: int | None = None
    notes: str | None = None


class BatchApplyRequest(CamelModel):
    job_ids: list[int] = Field(min_length=1)
    resume_id: int | None = None


class BatchApplyResultOut(CamelModel):
    job_id: int
    success: bool
    application_id: int | None = None
    message: str | None = None


class BatchApplyResponse(CamelModel):
    results: list[BatchApplyResultOut]


class ApplicationOut(CamelModel):
    id: int
    user_id: int
    job_id: int
    resume_id: int | None = None
    application_date: datetime
    status: ApplicationStatus
    last_status_update: datetime
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ApplicationDetailOut(CamelModel):
    application: ApplicationOut
    job: JobOut
    company: CompanyOut | None = None
    resume: ResumeOut | None = None


class ApplicationStatsOut(CamelModel):
    total_applications: int = 0
    responses_received: int = 0
    interviews_scheduled: int = 0
    success_rate: int = 0

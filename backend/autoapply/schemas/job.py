from __future__ import annotations

from datetime import datetime

from autoapply.schemas.base import CamelModel


class CompanyOut(CamelModel):
    id: int
    name: str
    logo: str | None = None
    website: str | None = None
    linkedin_id: str | None = None


class JobOut(CamelModel):
    id: int
    linkedin_job_id: str | None = None
    title: str
    company_id: int | None = None
    description: str | None = None
    location: str | None = None
    salary: str | None = None
    job_type: str | None = None
    experience_level: str | None = None
    skills: list[str] | None = None
    is_easy_apply: bool
    posted_date: datetime | None = None
    url: str
    created_at: datetime | None = None
    company: CompanyOut | None = None


class RecommendedJobOut(CamelModel):
    job: JobOut
    company: CompanyOut | None = None
    score: int

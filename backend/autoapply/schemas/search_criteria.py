from __future__ import annotations

from datetime import datetime

from pydantic import Field

from autoapply.models.enums import DatePosted, ExperienceLevel, JobType
from autoapply.schemas.application import BatchApplyResultOut
from autoapply.schemas.base import CamelModel
from autoapply.schemas.job import JobOut


class SearchCriteriaCreate(CamelModel):
    title: str = Field(min_length=2, max_length=255)
    keywords: list[str] = Field(default_factory=list)
    location: str | None = None
    experience_level: ExperienceLevel | None = None
    job_type: JobType | None = None
    date_posted: DatePosted | None = None
    auto_apply: bool = False


class SearchCriteriaUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=2, max_length=255)
    keywords: list[str] | None = None
    location: str | None = None
    experience_level: ExperienceLevel | None = None
    job_type: JobType | None = None
    date_posted: DatePosted | None = None
    auto_apply: bool | None = None


class SearchCriteriaOut(CamelModel):
    id: int
    user_id: int
    title: str
    keywords: list[str] | None = None
    location: str | None = None
    experience_level: str | None = None
    job_type: str | None = None
    date_posted: str | None = None
    auto_apply: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SearchRunResponse(CamelModel):
    jobs: list[JobOut]
    results: list[BatchApplyResultOut] = Field(default_factory=list)

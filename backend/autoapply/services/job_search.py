from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, contains_eager

from autoapply.models.company import Company
from autoapply.models.enums import DatePosted
from autoapply.models.job import Job


DEFAULT_PAGE_SIZE = 10


@dataclass
class JobFilters:
    """Optional job predicates; a `None` field imposes no constraint."""

    title: str | None = None
    location: str | None = None
    experience_level: str | None = None
    job_type: str | None = None
    is_easy_apply: bool | None = None
    date_posted: str | None = None
    keywords: list[str] = field(default_factory=list)


def date_posted_cutoff(value: str | None, now: datetime | None = None) -> datetime | None:
    """Lower bound on `posted_date` for a relative window, or None."""
    if not value:
        return None
    try:
        window = DatePosted(value).window
    except ValueError:
        return None
    return (now or datetime.utcnow()) - window


def _like(value: str) -> str:
    return f"%{value.strip()}%"


def jobs_with_company(db: Session) -> Query:
    return db.query(Job).outerjoin(Company, Job.company_id == Company.id).options(contains_eager(Job.company))


def apply_filters(query: Query, filters: JobFilters, now: datetime | None = None) -> Query:
    if filters.title:
        query = query.filter(Job.title.ilike(_like(filters.title)))
    if filters.location:
        query = query.filter(Job.location.ilike(_like(filters.location)))
    if filters.experience_level:
        query = query.filter(Job.experience_level == filters.experience_level)
    if filters.job_type:
        query = query.filter(Job.job_type == filters.job_type)
    if filters.is_easy_apply is not None:
        query = query.filter(Job.is_easy_apply == filters.is_easy_apply)

    cutoff = date_posted_cutoff(filters.date_posted, now)
    if cutoff is not None:
        query = query.filter(Job.posted_date >= cutoff)

    keywords = [keyword for keyword in filters.keywords if keyword and keyword.strip()]
    if keywords:
        query = query.filter(
            or_(*[
                or_(Job.title.ilike(_like(keyword)), Job.description.ilike(_like(keyword)))
                for keyword in keywords
            ])
        )
    return query


def newest_first(query: Query) -> Query:
    return query.order_by(Job.posted_date.desc().nullslast(), Job.id.desc())


def search_jobs(
    db: Session,
    filters: JobFilters,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    now: datetime | None = None,
) -> list[Job]:
    page = max(1, page)
    query = newest_first(apply_filters(jobs_with_company(db), filters, now))
    return query.offset((page - 1) * limit).limit(limit).all()


def get_job(db: Session, job_id: int) -> Job | None:
    return jobs_with_company(db).filter(Job.id == job_id).first()

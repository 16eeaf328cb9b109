from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from autoapply.models.job import Job
from autoapply.models.search_criteria import SearchCriteria
from autoapply.models.user import User
from autoapply.schemas.search_criteria import SearchCriteriaCreate, SearchCriteriaUpdate
from autoapply.services.applications import BatchApplyResult, apply_to_jobs
from autoapply.services.job_search import JobFilters, search_jobs


@dataclass
class SavedSearchRun:
    jobs: list[Job]
    results: list[BatchApplyResult] = field(default_factory=list)


def list_search_criteria(db: Session, user_id: int) -> list[SearchCriteria]:
    return (
        db.query(SearchCriteria)
        .filter(SearchCriteria.user_id == user_id)
        .order_by(SearchCriteria.updated_at.desc(), SearchCriteria.id.desc())
        .all()
    )


def get_search_criteria(db: Session, criteria_id: int) -> SearchCriteria | None:
    return db.query(SearchCriteria).filter(SearchCriteria.id == criteria_id).first()


def create_search_criteria(db: Session, user_id: int, payload: SearchCriteriaCreate) -> SearchCriteria:
    criteria = SearchCriteria(user_id=user_id, **payload.model_dump(mode="json"))
    db.add(criteria)
    db.commit()
    db.refresh(criteria)
    return criteria


def update_search_criteria(db: Session, criteria: SearchCriteria, payload: SearchCriteriaUpdate) -> SearchCriteria:
    for key, value in payload.model_dump(mode="json", exclude_unset=True).items():
        setattr(criteria, key, value)
    criteria.updated_at = datetime.utcnow()
    db.add(criteria)
    db.commit()
    db.refresh(criteria)
    return criteria


def delete_search_criteria(db: Session, criteria: SearchCriteria) -> None:
    db.delete(criteria)
    db.commit()


def criteria_to_filters(criteria: SearchCriteria) -> JobFilters:
    return JobFilters(
        location=criteria.location or None,
        experience_level=criteria.experience_level or None,
        job_type=criteria.job_type or None,
        date_posted=criteria.date_posted or None,
        is_easy_apply=True if criteria.auto_apply else None,
        keywords=list(criteria.keywords or []),
    )


def run_saved_search(db: Session, user: User, criteria: SearchCriteria, limit: int = 25) -> SavedSearchRun:
    """Run a saved search; auto-apply searches also apply to every match."""
    jobs = search_jobs(db, criteria_to_filters(criteria), page=1, limit=limit)
    if not criteria.auto_apply or not jobs:
        return SavedSearchRun(jobs=jobs)

    results = apply_to_jobs(db, user, [job.id for job in jobs])
    return SavedSearchRun(jobs=jobs, results=results)

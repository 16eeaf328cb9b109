from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.orm import Session

from autoapply.models.job import Job
from autoapply.models.profile import Profile
from autoapply.services.job_search import jobs_with_company, newest_first


DEFAULT_RECOMMENDATION_LIMIT = 3
CANDIDATE_POOL_FACTOR = 3


@dataclass
class RecommendedJob:
    job: Job
    score: int


class JobRecommender:
    """Ranks recent easy-apply jobs by how many skills they share with a user.

    Only the `limit * CANDIDATE_POOL_FACTOR` most recent easy-apply postings
    are scored, so a strong match outside that window is never returned.
    """

    def __init__(self, pool_factor: int = CANDIDATE_POOL_FACTOR) -> None:
        self.pool_factor = pool_factor

    def recommend_jobs(self, db: Session, user_id: int, limit: int = DEFAULT_RECOMMENDATION_LIMIT) -> list[RecommendedJob]:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        user_skills = self._normalize_set(profile.skills if profile else None)

        if not user_skills:
            return [RecommendedJob(job=job, score=0) for job in self._recent_easy_apply(db, limit)]

        candidates = self._recent_easy_apply(db, limit * self.pool_factor)
        return self.rank_by_skill_overlap(candidates, user_skills, limit)

    def rank_by_skill_overlap(self, jobs: list[Job], user_skills: Iterable[str], limit: int) -> list[RecommendedJob]:
        skills = self._normalize_set(user_skills)
        scored = [RecommendedJob(job=job, score=self.skill_overlap(job.skills, skills)) for job in jobs]
        # sorted() is stable: equal scores keep their recency order.
        return sorted(scored, key=lambda item: item.score, reverse=True)[:limit]

    def skill_overlap(self, job_skills: Iterable[str] | None, user_skills: Iterable[str] | None) -> int:
        return len(self._normalize_set(job_skills) & self._normalize_set(user_skills))

    def _recent_easy_apply(self, db: Session, limit: int) -> list[Job]:
        query = jobs_with_company(db).filter(Job.is_easy_apply.is_(True))
        return newest_first(query).limit(limit).all()

    def _normalize_set(self, values: Iterable[str] | None) -> set[str]:
        return {token for token in (self._normalize_token(value) for value in values or []) if token}

    def _normalize_token(self, value: str) -> str:
        if not isinstance(value, str):
            return ""
        return re.sub(r"\s+", " ", value.strip().lower())

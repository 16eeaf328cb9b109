from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from autoapply.auth import get_current_user
from autoapply.database import get_db
from autoapply.models.user import User
from autoapply.schemas.application import ApplicationStatsOut
from autoapply.schemas.job import RecommendedJobOut
from autoapply.services.applications import application_stats
from autoapply.services.recommender import DEFAULT_RECOMMENDATION_LIMIT, JobRecommender


router = APIRouter()
recommender = JobRecommender()


@router.get("/stats", response_model=ApplicationStatsOut)
def stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationStatsOut:
    return ApplicationStatsOut(**application_stats(db, current_user.id))


@router.get("/recommended-jobs", response_model=list[RecommendedJobOut])
def recommended_jobs(
    limit: int = Query(default=DEFAULT_RECOMMENDATION_LIMIT, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[dict]:
    recommendations = recommender.recommend_jobs(db, current_user.id, limit=limit)
    return [
        {"job": item.job, "company": item.job.company, "score": item.score}
        for item in recommendations
    ]

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from autoapply.auth import get_current_user
from autoapply.database import get_db
from autoapply.models.search_criteria import SearchCriteria
from autoapply.models.user import User
from autoapply.schemas.base import MessageResponse
from autoapply.schemas.search_criteria import (
    SearchCriteriaCreate,
    SearchCriteriaOut,
    SearchCriteriaUpdate,
    SearchRunResponse,
)
from autoapply.services import search_criteria as criteria_service


router = APIRouter()


def _owned_criteria(db: Session, criteria_id: int, user: User, action: str) -> SearchCriteria:
    criteria = criteria_service.get_search_criteria(db, criteria_id)
    if not criteria:
        raise HTTPException(status_code=404, detail="Search criteria not found")
    if criteria.user_id != user.id:
        raise HTTPException(status_code=403, detail=f"Not authorized to {action} this search criteria")
    return criteria


@router.get("", response_model=list[SearchCriteriaOut])
def list_search_criteria(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[SearchCriteria]:
    return criteria_service.list_search_criteria(db, current_user.id)


@router.post("", response_model=SearchCriteriaOut, status_code=status.HTTP_201_CREATED)
def create_search_criteria(
    payload: SearchCriteriaCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SearchCriteria:
    return criteria_service.create_search_criteria(db, current_user.id, payload)


@router.get("/{criteria_id}", response_model=SearchCriteriaOut)
def get_search_criteria(
    criteria_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SearchCriteria:
    return _owned_criteria(db, criteria_id, current_user, "access")


@router.put("/{criteria_id}", response_model=SearchCriteriaOut)
def update_search_criteria(
    criteria_id: int,
    payload: SearchCriteriaUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SearchCriteria:
    criteria = _owned_criteria(db, criteria_id, current_user, "update")
    return criteria_service.update_search_criteria(db, criteria, payload)


@router.delete("/{criteria_id}", response_model=MessageResponse)
def delete_search_criteria(
    criteria_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    criteria = _owned_criteria(db, criteria_id, current_user, "delete")
    criteria_service.delete_search_criteria(db, criteria)
    return MessageResponse(message="Search criteria deleted successfully")


@router.post("/{criteria_id}/run", response_model=SearchRunResponse)
def run_search_criteria(
    criteria_id: int,
    limit: int = Query(default=25, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SearchRunResponse:
    criteria = _owned_criteria(db, criteria_id, current_user, "run")
    run = criteria_service.run_saved_search(db, current_user, criteria, limit=limit)
    return SearchRunResponse.model_validate({"jobs": run.jobs, "results": run.results}, from_attributes=True)

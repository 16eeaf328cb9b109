from autoapply.schemas.application import (
    ApplicationCreate,
    ApplicationDetailOut,
    ApplicationOut,
    ApplicationStatsOut,
    ApplicationUpdate,
    ApplyRequest,
    BatchApplyRequest,
    BatchApplyResponse,
)
from autoapply.schemas.auth import AuthResponse, AuthStatusResponse, LoginRequest, RegisterRequest
from autoapply.schemas.job import CompanyOut, JobOut, RecommendedJobOut
from autoapply.schemas.profile import ProfileOut, ProfileUpdate
from autoapply.schemas.resume import ResumeCreate, ResumeOut, ResumeUpdate
from autoapply.schemas.search_criteria import (
    SearchCriteriaCreate,
    SearchCriteriaOut,
    SearchCriteriaUpdate,
    SearchRunResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "AuthStatusResponse",
    "ProfileOut",
    "ProfileUpdate",
    "ResumeCreate",
    "ResumeUpdate",
    "ResumeOut",
    "CompanyOut",
    "JobOut",
    "RecommendedJobOut",
    "ApplicationCreate",
    "ApplicationUpdate",
    "ApplicationOut",
    "ApplicationDetailOut",
    "ApplicationStatsOut",
    "ApplyRequest",
    "BatchApplyRequest",
    "BatchApplyResponse",
    "SearchCriteriaCreate",
    "SearchCriteriaUpdate",
    "SearchCriteriaOut",
    "SearchRunResponse",
]

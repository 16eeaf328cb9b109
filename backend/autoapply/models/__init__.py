from autoapply.models.application import JobApplication
from autoapply.models.company import Company
from autoapply.models.enums import ApplicationStatus, DatePosted, ExperienceLevel, JobType
from autoapply.models.job import Job
from autoapply.models.profile import Profile
from autoapply.models.resume import Resume
from autoapply.models.search_criteria import SearchCriteria
from autoapply.models.session import UserSession
from autoapply.models.user import User

__all__ = [
    "User",
    "Profile",
    "Resume",
    "Company",
    "Job",
    "JobApplication",
    "SearchCriteria",
    "UserSession",
    "ApplicationStatus",
    "JobType",
    "ExperienceLevel",
    "DatePosted",
]

from __future__ import annotations

from datetime import timedelta
from enum import Enum


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    IN_REVIEW = "in_review"
    VIEWED = "viewed"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    REJECTED = "rejected"
    NO_RESPONSE = "no_response"
    HIRED = "hired"


class JobType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    TEMPORARY = "temporary"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class DatePosted(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def window(self) -> timedelta:
        return DATE_POSTED_WINDOWS[self]


DATE_POSTED_WINDOWS = {
    DatePosted.DAY: timedelta(days=1),
    DatePosted.WEEK: timedelta(days=7),
    DatePosted.MONTH: timedelta(days=30),
}

# Statuses that do not count as a reply from the employer.
NO_RESPONSE_STATUSES = frozenset({ApplicationStatus.APPLIED.value, ApplicationStatus.NO_RESPONSE.value})

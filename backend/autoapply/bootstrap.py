from __future__ import annotations

from datetime import datetime, timedelta

import structlog
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from autoapply.auth import hash_password
from autoapply.config import settings
from autoapply.database import Base, SessionLocal
from autoapply.models import Company, Job, JobApplication, Profile, Resume, SearchCriteria, User


logger = structlog.get_logger(__name__)

DEMO_USERNAME = "testuser"
DEMO_PASSWORD = "password123"

DEMO_COMPANIES = [
    ("Airbnb Inc.", "airbnb.com"),
    ("Stripe", "stripe.com"),
    ("Google", "google.com"),
    ("Facebook", "facebook.com"),
    ("Amazon", "amazon.com"),
    ("Microsoft", "microsoft.com"),
    ("Spotify", "spotify.com"),
    ("Adobe", "adobe.com"),
    ("Netflix", "netflix.com"),
    ("Slack", "slack.com"),
]

# (title, description, location, salary, experience level, skills, days since posting)
DEMO_JOBS = [
    (
        "Senior Frontend Developer",
        "We are looking for a talented Frontend Developer to join our team. "
        "You will work on building user interfaces for our platform.",
        "Remote (US)",
        "$120k - $150k",
        "senior",
        ["JavaScript", "React", "TypeScript", "HTML/CSS"],
        2,
    ),
    (
        "Full Stack Engineer",
        "Join our engineering team to build and scale our payment infrastructure.",
        "New York, NY",
        "$140k - $170k",
        "mid",
        ["JavaScript", "Node.js", "React", "PostgreSQL"],
        3,
    ),
    (
        "UI/UX Designer",
        "Design beautiful and intuitive user interfaces for our products.",
        "Mountain View, CA",
        "$110k - $140k",
        "mid",
        ["Figma", "UI Design", "UX Research", "Prototyping"],
        7,
    ),
    (
        "Product Manager",
        "Lead product development and strategy for our social media platform.",
        "Menlo Park, CA",
        "$150k - $180k",
        "senior",
        ["Product Strategy", "User Research", "Agile", "Market Analysis"],
        7,
    ),
    (
        "React Developer",
        "Build responsive and scalable frontend applications using React.",
        "Seattle, WA",
        "$130k - $160k",
        "mid",
        ["React", "JavaScript", "Redux", "CSS"],
        14,
    ),
    (
        "React Native Developer",
        "Develop cross-platform mobile applications using React Native.",
        "Remote (US)",
        "$120k - $150k",
        "senior",
        ["React Native", "JavaScript", "iOS", "Android"],
        1,
    ),
    (
        "Data Scientist",
        "Analyze user data to improve our music recommendation algorithms.",
        "New York, NY",
        "$140k - $170k",
        "mid",
        ["Python", "Machine Learning", "SQL", "Statistics"],
        2,
    ),
    (
        "Product Designer",
        "Create beautiful and intuitive design solutions for our creative tools.",
        "San Francisco, CA",
        "$110k - $140k",
        "senior",
        ["UI Design", "UX Design", "Adobe Creative Suite", "Figma"],
        3,
    ),
    (
        "Frontend Developer",
        "Build user interfaces for our streaming platform.",
        "Los Angeles, CA",
        "$115k - $145k",
        "mid",
        ["JavaScript", "React", "TypeScript", "HTML/CSS"],
        2,
    ),
    (
        "UI/UX Designer",
        "Design intuitive interfaces for our collaboration platform.",
        "San Francisco, CA",
        "$120k - $150k",
        "mid",
        ["Figma", "UI Design", "UX Research"],
        3,
    ),
]

# (job index, status, days since applying, days since last update, notes)
DEMO_APPLICATIONS = [
    (0, "in_review", 2, 1, "Applied via LinkedIn Easy Apply"),
    (1, "viewed", 3, 1, "Application viewed by recruiter"),
    (2, "interview_scheduled", 7, 2, "Interview scheduled for next week"),
    (3, "rejected", 7, 3, "Rejected due to experience mismatch"),
    (4, "no_response", 14, 14, "No response yet"),
]


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def seed_demo_data(db: Session, now: datetime | None = None) -> bool:
    """Populate an empty database with a demo account and sample jobs.

    Returns False without touching anything when any user already exists.
    """
    if db.query(User.id).first() is not None:
        logger.info("seed_skipped", reason="users_exist")
        return False

    now = now or datetime.utcnow()
    user = User(
        username=DEMO_USERNAME,
        password_hash=hash_password(DEMO_PASSWORD),
        email="test@example.com",
        full_name="Alex Johnson",
        linkedin_connected=True,
        last_synced=now,
    )
    db.add(user)
    db.flush()

    db.add(
        Profile(
            user_id=user.id,
            headline="Senior Frontend Developer",
            summary="Experienced developer with expertise in React, TypeScript, and modern frontend technologies.",
            location="San Francisco, CA",
            phone_number="555-123-4567",
            skills=["JavaScript", "React", "TypeScript", "HTML/CSS", "Node.js", "GraphQL"],
        )
    )
    resume = Resume(
        user_id=user.id,
        title="Main Resume",
        content="Professional resume content would go here.",
        is_default=True,
    )
    db.add(resume)

    companies = [
        Company(name=name, logo=f"https://logo.clearbit.com/{domain}", website=f"https://{domain}")
        for name, domain in DEMO_COMPANIES
    ]
    db.add_all(companies)
    db.flush()

    jobs = []
    for index, (title, description, location, salary, level, skills, age_days) in enumerate(DEMO_JOBS):
        jobs.append(
            Job(
                title=title,
                company_id=companies[index].id,
                description=description,
                location=location,
                salary=salary,
                job_type="full_time",
                experience_level=level,
                skills=skills,
                is_easy_apply=True,
                posted_date=now - timedelta(days=age_days),
                url=f"https://linkedin.com/jobs/view/{123456 + index}",
            )
        )
    db.add_all(jobs)
    db.flush()

    for job_index, status, applied_days, updated_days, notes in DEMO_APPLICATIONS:
        db.add(
            JobApplication(
                user_id=user.id,
                job_id=jobs[job_index].id,
                resume_id=resume.id,
                status=status,
                application_date=now - timedelta(days=applied_days),
                last_status_update=now - timedelta(days=updated_days),
                notes=notes,
            )
        )

    db.add(
        SearchCriteria(
            user_id=user.id,
            title="Frontend Developer Search",
            keywords=["Frontend", "React", "JavaScript"],
            location="Remote",
            experience_level="senior",
            job_type="full_time",
            date_posted="week",
            auto_apply=True,
        )
    )
    db.commit()
    logger.info("seed_completed", user_id=user.id, companies=len(companies), jobs=len(jobs))
    return True


def run_startup_tasks(engine: Engine) -> None:
    init_db(engine)
    if not settings.seed_demo_data:
        return
    db = SessionLocal(bind=engine)
    try:
        seed_demo_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    from autoapply.database import engine
    from autoapply.logging_config import configure_logging

    configure_logging()
    settings.ensure_directories()
    init_db(engine)
    db = SessionLocal()
    try:
        seed_demo_data(db)
    finally:
        db.close()

from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from autoapply.database import Base


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_posted_date", "posted_date"),
        Index("idx_easy_apply_posted", "is_easy_apply", "posted_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    linkedin_job_id = Column(String(255), unique=True)
    title = Column(String(500), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="SET NULL"), index=True)
    description = Column(Text)
    location = Column(String(255))
    salary = Column(String(255))
    job_type = Column(String(50))
    experience_level = Column(String(50))
    skills = Column(JSON, default=list)
    is_easy_apply = Column(Boolean, default=False, nullable=False)
    posted_date = Column(DateTime)
    url = Column(String(1000), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    company = relationship("Company", back_populates="jobs")

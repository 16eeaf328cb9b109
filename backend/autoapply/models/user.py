from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func
from sqlalchemy.orm import relationship

from autoapply.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(120), unique=True, nullable=False, index=True)
    password_hash = Column(String(512), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    linkedin_id = Column(String(255), unique=True)
    linkedin_access_token = Column(Text)
    linkedin_token_expiry = Column(DateTime)
    linkedin_connected = Column(Boolean, default=False, nullable=False)
    profile_picture = Column(String(1000))
    last_synced = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan", passive_deletes=True)
    resumes = relationship("Resume", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    applications = relationship("JobApplication", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    search_criteria = relationship("SearchCriteria", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

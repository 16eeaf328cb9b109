from __future__ import annotations

from datetime import datetime
from typing import Any

from autoapply.schemas.base import CamelModel


class ProfileUpdate(CamelModel):
    headline: str | None = None
    summary: str | None = None
    location: str | None = None
    phone_number: str | None = None
    website: str | None = None
    skills: list[str] | None = None
    education: list[dict[str, Any]] | None = None
    experience: list[dict[str, Any]] | None = None


class ProfileOut(CamelModel):
    id: int
    user_id: int
    headline: str | None = None
    summary: str | None = None
    location: str | None = None
    phone_number: str | None = None
    website: str | None = None
    skills: list[str] | None = None
    education: list[dict[str, Any]] | None = None
    experience: list[dict[str, Any]] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

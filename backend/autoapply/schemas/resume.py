from __future__ import annotations

from datetime import datetime

from pydantic import Field

from autoapply.schemas.base import CamelModel


class ResumeCreate(CamelModel):
    title: str = Field(min_length=2, max_length=255)
    content: str = Field(min_length=1)
    is_default: bool = False


class ResumeUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=2, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    is_default: bool | None = None


class ResumeOut(CamelModel):
    id: int
    user_id: int
    title: str
    content: str
    is_default: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

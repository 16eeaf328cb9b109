from __future__ import annotations

from pydantic import EmailStr, Field

from autoapply.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=120)
    password: str = Field(min_length=8, max_length=256)
    email: EmailStr
    full_name: str = Field(min_length=2, max_length=255)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=1, max_length=256)


class AuthResponse(CamelModel):
    id: int
    username: str


class SessionUser(CamelModel):
    id: int
    username: str
    full_name: str
    linkedin_connected: bool


class AuthStatusResponse(CamelModel):
    is_authenticated: bool
    user: SessionUser | None = None

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from autoapply.auth import (
    clear_session_cookie,
    create_session,
    destroy_session,
    get_optional_user,
    hash_password,
    session_cookie,
    set_session_cookie,
    verify_password,
)
from autoapply.database import get_db
from autoapply.models.profile import Profile
from autoapply.models.user import User
from autoapply.schemas.auth import AuthResponse, AuthStatusResponse, LoginRequest, RegisterRequest, SessionUser
from autoapply.schemas.base import MessageResponse


router = APIRouter()
logger = structlog.get_logger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, response: Response, db: Session = Depends(get_db)) -> AuthResponse:
    username = payload.username.strip().lower()
    if len(username) < 3:
        raise HTTPException(status_code=400, detail="Username must be at least 3 characters")
    email = str(payload.email).strip().lower()

    if db.query(User).filter(User.username == username).first():
        raise HTTPException(status_code=409, detail="Username already exists")
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="Email already exists")

    user = User(
        username=username,
        password_hash=hash_password(payload.password),
        email=email,
        full_name=payload.full_name.strip(),
    )
    db.add(user)
    db.flush()
    db.add(Profile(user_id=user.id, skills=[]))
    db.commit()
    db.refresh(user)

    set_session_cookie(response, create_session(db, user))
    logger.info("user_registered", user_id=user.id)
    return AuthResponse(id=user.id, username=user.username)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> AuthResponse:
    username = payload.username.strip().lower()
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("login_failed", username=username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    set_session_cookie(response, create_session(db, user))
    logger.info("login_succeeded", user_id=user.id)
    return AuthResponse(id=user.id, username=user.username)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    cookie_value: str | None = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> MessageResponse:
    destroy_session(db, cookie_value)
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/status", response_model=AuthStatusResponse)
def auth_status(current_user: User | None = Depends(get_optional_user)) -> AuthStatusResponse:
    if current_user is None:
        return AuthStatusResponse(is_authenticated=False)
    return AuthStatusResponse(
        is_authenticated=True,
        user=SessionUser(
            id=current_user.id,
            username=current_user.username,
            full_name=current_user.full_name,
            linkedin_connected=bool(current_user.linkedin_connected),
        ),
    )

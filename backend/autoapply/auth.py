from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta

from fastapi import Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from autoapply.config import settings
from autoapply.database import get_db
from autoapply.models.session import UserSession
from autoapply.models.user import User


session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)
DEFAULT_ITERATIONS = 210_000


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        DEFAULT_ITERATIONS,
    ).hex()
    return f"pbkdf2_sha256${DEFAULT_ITERATIONS}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _, iterations_str, salt, digest = password_hash.split("$", 3)
        iterations = int(iterations_str)
    except ValueError:
        return False
    expected = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    ).hex()
    return hmac.compare_digest(expected, digest)


def _signature(session_id: str) -> str:
    return hmac.new(settings.session_secret.encode("utf-8"), session_id.encode("utf-8"), hashlib.sha256).hexdigest()


def sign_session_id(session_id: str) -> str:
    return f"{session_id}.{_signature(session_id)}"


def unsign_session_cookie(value: str | None) -> str | None:
    if not value:
        return None
    session_id, _, signature = value.rpartition(".")
    if not session_id or not signature:
        return None
    if not hmac.compare_digest(_signature(session_id), signature):
        return None
    return session_id


def create_session(db: Session, user: User) -> str:
    """Persist a new session for `user` and return the signed cookie value."""
    session_id = secrets.token_urlsafe(32)
    db.add(
        UserSession(
            id=session_id,
            user_id=user.id,
            expires_at=datetime.utcnow() + timedelta(days=settings.session_ttl_days),
        )
    )
    db.commit()
    return sign_session_id(session_id)


def resolve_session(db: Session, cookie_value: str | None) -> User | None:
    session_id = unsign_session_cookie(cookie_value)
    if session_id is None:
        return None

    row = db.query(UserSession).filter(UserSession.id == session_id).first()
    if not row:
        return None
    if row.expires_at < datetime.utcnow():
        db.delete(row)
        db.commit()
        return None
    return db.query(User).filter(User.id == row.user_id).first()


def destroy_session(db: Session, cookie_value: str | None) -> None:
    session_id = unsign_session_cookie(cookie_value)
    if session_id is None:
        return
    db.query(UserSession).filter(UserSession.id == session_id).delete(synchronize_session=False)
    db.commit()


def set_session_cookie(response: Response, cookie_value: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=cookie_value,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.session_cookie_name)


def get_optional_user(
    cookie_value: str | None = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> User | None:
    return resolve_session(db, cookie_value)


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user

from __future__ import annotations

import secrets

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from autoapply.auth import get_current_user
from autoapply.database import get_db
from autoapply.models.user import User
from autoapply.schemas.base import MessageResponse
from autoapply.schemas.linkedin import LinkedInConnectResponse
from autoapply.services.linkedin import (
    LinkedInAccountInUseError,
    LinkedInClient,
    LinkedInError,
    connect_account,
    disconnect_account,
)


router = APIRouter()
logger = structlog.get_logger(__name__)


def get_linkedin_client() -> LinkedInClient:
    return LinkedInClient()


@router.get("/connect", response_model=LinkedInConnectResponse)
def connect(
    current_user: User = Depends(get_current_user),
    client: LinkedInClient = Depends(get_linkedin_client),
) -> LinkedInConnectResponse:
    return LinkedInConnectResponse(
        message="Redirect the browser to authorizationUrl to connect LinkedIn",
        authorization_url=client.authorization_url(state=secrets.token_urlsafe(16)),
        simulated=client.simulated,
    )


@router.get("/callback")
def callback(
    code: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: LinkedInClient = Depends(get_linkedin_client),
) -> RedirectResponse:
    try:
        connection = client.exchange_code(code, current_user)
        connect_account(db, current_user, connection)
    except LinkedInAccountInUseError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except LinkedInError as exc:
        logger.warning("linkedin_connect_failed", user_id=current_user.id, error=str(exc))
        raise HTTPException(status_code=502, detail="Failed to connect LinkedIn account") from exc
    return RedirectResponse(url="/", status_code=302)


@router.post("/disconnect", response_model=MessageResponse)
def disconnect(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    disconnect_account(db, current_user)
    return MessageResponse(message="LinkedIn account disconnected successfully")

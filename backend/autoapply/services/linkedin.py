from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from urllib.parse import urlencode

import httpx
import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from autoapply.config import Settings, settings as default_settings
from autoapply.models.user import User


logger = structlog.get_logger(__name__)

AUTHORIZE_URL = "https://www.linkedin.com/oauth/v2/authorization"
TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
USERINFO_URL = "https://api.linkedin.com/v2/userinfo"
SIMULATED_TOKEN = "sample-token"


class LinkedInError(Exception):
    pass


class LinkedInAccountInUseError(LinkedInError):
    pass


@dataclass
class LinkedInConnection:
    member_id: str
    access_token: str
    expires_at: datetime
    profile_picture: str | None = None


class LinkedInClient:
    """OAuth client for the LinkedIn account link.

    Without client credentials configured the client simulates a successful
    authorization, which is how the app runs in development and tests.
    """

    def __init__(self, config: Settings | None = None, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config or default_settings
        self.transport = transport

    @property
    def simulated(self) -> bool:
        return not self.config.linkedin_configured

    def authorization_url(self, state: str) -> str:
        params = {
            "response_type": "code",
            "client_id": self.config.linkedin_client_id or "demo-client",
            "redirect_uri": self.config.linkedin_redirect_uri,
            "state": state,
            "scope": self.config.linkedin_scope,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str | None, user: User) -> LinkedInConnection:
        if self.simulated:
            return LinkedInConnection(
                member_id=f"linkedin-{user.id}",
                access_token=SIMULATED_TOKEN,
                expires_at=datetime.utcnow() + timedelta(days=self.config.linkedin_token_ttl_days),
            )
        if not code:
            raise LinkedInError("Missing authorization code")

        with httpx.Client(timeout=self.config.linkedin_timeout_seconds, transport=self.transport) as client:
            token_response = client.post(
                TOKEN_URL,
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self.config.linkedin_redirect_uri,
                    "client_id": self.config.linkedin_client_id,
                    "client_secret": self.config.linkedin_client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            if token_response.status_code != 200:
                raise LinkedInError(f"Token exchange failed with status {token_response.status_code}")
            token_payload = token_response.json()
            access_token = token_payload["access_token"]
            expires_in = int(token_payload.get("expires_in", self.config.linkedin_token_ttl_days * 86400))

            profile_response = client.get(USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"})
            if profile_response.status_code != 200:
                raise LinkedInError(f"Profile lookup failed with status {profile_response.status_code}")
            profile = profile_response.json()

        return LinkedInConnection(
            member_id=str(profile["sub"]),
            access_token=access_token,
            expires_at=datetime.utcnow() + timedelta(seconds=expires_in),
            profile_picture=profile.get("picture"),
        )


def connect_account(db: Session, user: User, connection: LinkedInConnection) -> User:
    now = datetime.utcnow()
    user.linkedin_connected = True
    user.linkedin_id = connection.member_id
    user.linkedin_access_token = connection.access_token
    user.linkedin_token_expiry = connection.expires_at
    if connection.profile_picture:
        user.profile_picture = connection.profile_picture
    user.last_synced = now
    user.updated_at = now
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise LinkedInAccountInUseError("LinkedIn account is linked to another user")
    db.refresh(user)
    logger.info("linkedin_connected", user_id=user.id)
    return user


def disconnect_account(db: Session, user: User) -> User:
    user.linkedin_connected = False
    user.linkedin_access_token = None
    user.linkedin_token_expiry = None
    user.updated_at = datetime.utcnow()
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("linkedin_disconnected", user_id=user.id)
    return user

from __future__ import annotations

from autoapply.schemas.base import CamelModel


class LinkedInConnectResponse(CamelModel):
    message: str
    authorization_url: str
    simulated: bool

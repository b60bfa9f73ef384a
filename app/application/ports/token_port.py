from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.application.dto.auth import AccessToken, AccessTokenClaims


class TokenPort(Protocol):
    def issue_access_token(self, *, user_id: str, now: datetime) -> AccessToken:
        ...

    def read_access_token(self, *, token: str) -> AccessTokenClaims:
        """Raise ValueError when the token is forged, expired or malformed."""
        ...

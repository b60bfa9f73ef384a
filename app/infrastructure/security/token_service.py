from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from app.application.dto.auth import AccessToken, AccessTokenClaims
from app.application.ports.token_port import TokenPort


ACCESS_TOKEN_ISSUER = "saas-subscription-api"
_ALGORITHM = "HS256"


class JwtTokenService(TokenPort):
    """HS256 bearer tokens that identify a user and nothing else."""

    def __init__(
        self,
        *,
        jwt_secret: str,
        access_ttl_minutes: int,
    ):
        self._jwt_secret = jwt_secret
        self._access_ttl = timedelta(minutes=access_ttl_minutes)

    def issue_access_token(self, *, user_id: str, now: datetime) -> AccessToken:
        expires_at = now + self._access_ttl
        claims = {
            "sub": user_id,
            "iss": ACCESS_TOKEN_ISSUER,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._jwt_secret, algorithm=_ALGORITHM)
        return AccessToken(token=token, expires_at=expires_at)

    def read_access_token(self, *, token: str) -> AccessTokenClaims:
        try:
            claims = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[_ALGORITHM],
                issuer=ACCESS_TOKEN_ISSUER,
                options={"require": ["sub", "iss", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ValueError("Access token expired.") from exc
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid access token.") from exc

        user_id = claims["sub"]
        if not isinstance(user_id, str) or not user_id:
            raise ValueError("Invalid token subject.")

        return AccessTokenClaims(
            user_id=user_id,
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )

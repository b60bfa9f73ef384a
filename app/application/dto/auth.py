from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuthUserOutput:
    id: str
    email: str
    role: str
    subscription_status: str | None


@dataclass(frozen=True)
class RegisterUserInput:
    email: str
    password: str


@dataclass(frozen=True)
class RegisterUserOutput:
    user: AuthUserOutput


@dataclass(frozen=True)
class LoginLocalInput:
    email: str
    password: str


@dataclass(frozen=True)
class AccessToken:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class LoginLocalOutput:
    user: AuthUserOutput
    access_token: AccessToken


@dataclass(frozen=True)
class AccessTokenClaims:
    """Identity carried by a bearer token.

    Role and subscription status are not carried here; they are read
    from the users table on every request.
    """

    user_id: str
    expires_at: datetime

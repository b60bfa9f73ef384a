from __future__ import annotations

from datetime import datetime, timezone

from app.application.dto.auth import AuthUserOutput
from app.domain.entities.user import User


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def build_auth_user_output(user: User) -> AuthUserOutput:
    return AuthUserOutput(
        id=user.id,
        email=user.email,
        role=user.role,
        subscription_status=user.subscription_status,
    )

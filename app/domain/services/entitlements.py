from __future__ import annotations

from app.domain.entities.subscription import ACTIVE_STATUS
from app.domain.entities.user import User


def has_active_subscription(user: User) -> bool:
    return user.subscription_status == ACTIVE_STATUS


def is_admin(user: User) -> bool:
    return user.role == "ADMIN"

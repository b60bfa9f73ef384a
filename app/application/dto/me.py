from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MeOutput:
    user_id: str
    email: str
    role: str
    subscription_status: str | None
    subscription_id: str | None
    has_active_subscription: bool


@dataclass(frozen=True)
class AdminUserOutput:
    id: str
    email: str
    role: str
    subscription_status: str | None
    subscription_id: str | None
    created_at: datetime

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


UserRole = Literal["USER", "ADMIN"]


@dataclass(frozen=True)
class User:
    id: str
    email: str
    password_hash: str
    role: UserRole
    subscription_status: str | None
    subscription_id: str | None
    stripe_customer_id: str | None
    created_at: datetime
    updated_at: datetime

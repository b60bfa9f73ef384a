from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class MeUserResponse(BaseModel):
    id: str
    email: str
    role: str
    subscription_status: str | None
    subscription_id: str | None
    has_active_subscription: bool


class MeResponse(BaseModel):
    user: MeUserResponse


class AdminUserResponse(BaseModel):
    id: str
    email: str
    role: str
    subscription_status: str | None
    subscription_id: str | None
    created_at: datetime


class AdminUsersResponse(BaseModel):
    users: list[AdminUserResponse]

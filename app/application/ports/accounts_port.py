from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.domain.entities.user import User, UserRole


class AccountsPort(Protocol):
    def get_user_by_id(self, *, user_id: str) -> User | None:
        ...

    def get_user_by_email(self, *, email: str) -> User | None:
        ...

    def list_users(self) -> list[User]:
        ...

    def create_user(
        self,
        *,
        user_id: str,
        email: str,
        password_hash: str,
        role: UserRole,
        created_at: datetime,
    ) -> User:
        ...

    def set_stripe_customer_id_if_absent(self, *, user_id: str, stripe_customer_id: str) -> bool:
        ...

    def set_subscription(self, *, user_id: str, subscription_id: str, status: str) -> int:
        ...

    def update_subscription_status_by_subscription_id(self, *, subscription_id: str, status: str) -> int:
        ...

    def clear_subscription_by_subscription_id(self, *, subscription_id: str, status: str) -> int:
        ...

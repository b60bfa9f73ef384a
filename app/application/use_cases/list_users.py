from __future__ import annotations

from app.application.dto.me import AdminUserOutput
from app.application.ports.accounts_port import AccountsPort


class ListUsersUseCase:
    def __init__(self, *, accounts_port: AccountsPort):
        self._accounts_port = accounts_port

    def execute(self) -> list[AdminUserOutput]:
        return [
            AdminUserOutput(
                id=user.id,
                email=user.email,
                role=user.role,
                subscription_status=user.subscription_status,
                subscription_id=user.subscription_id,
                created_at=user.created_at,
            )
            for user in self._accounts_port.list_users()
        ]

from __future__ import annotations

from app.application.dto.me import MeOutput
from app.domain.entities.user import User
from app.domain.services.entitlements import has_active_subscription


class GetMeUseCase:
    def execute(self, *, user: User) -> MeOutput:
        return MeOutput(
            user_id=user.id,
            email=user.email,
            role=user.role,
            subscription_status=user.subscription_status,
            subscription_id=user.subscription_id,
            has_active_subscription=has_active_subscription(user),
        )

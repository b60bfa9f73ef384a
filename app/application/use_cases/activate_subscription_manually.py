from __future__ import annotations

import logging

from app.application.dto.billing import ManualActivationInput, ManualActivationOutput
from app.application.ports.accounts_port import AccountsPort
from app.domain.entities.subscription import ACTIVE_STATUS
from app.domain.exceptions import InvalidInputError, UserNotFoundError


logger = logging.getLogger(__name__)


class ActivateSubscriptionManuallyUseCase:
    """Mark a subscription active without a signed Stripe event.

    Only for environments where Stripe cannot reach the webhook endpoint.
    """

    def __init__(self, *, accounts_port: AccountsPort):
        self._accounts_port = accounts_port

    def execute(self, command: ManualActivationInput) -> ManualActivationOutput:
        user_id = (command.user_id or "").strip()
        subscription_id = (command.subscription_id or "").strip()
        if not user_id or not subscription_id:
            raise InvalidInputError("user_id and subscription_id are required.")

        updated = self._accounts_port.set_subscription(
            user_id=user_id,
            subscription_id=subscription_id,
            status=ACTIVE_STATUS,
        )
        if updated == 0:
            raise UserNotFoundError("User not found.")

        logger.warning(
            "manual_activation: subscription activated without webhook user_id=%s subscription_id=%s",
            user_id,
            subscription_id,
        )
        return ManualActivationOutput(user_id=user_id, subscription_id=subscription_id)

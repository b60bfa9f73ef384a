from __future__ import annotations

import logging

from app.application.dto.billing import (
    CheckoutPrice,
    CreateCheckoutSessionInput,
    CreateCheckoutSessionOutput,
)
from app.application.ports.accounts_port import AccountsPort
from app.application.ports.stripe_port import StripePort
from app.domain.entities.user import User
from app.domain.exceptions import UserNotFoundError


logger = logging.getLogger(__name__)


class CreateCheckoutSessionUseCase:
    def __init__(
        self,
        *,
        accounts_port: AccountsPort,
        stripe_port: StripePort,
        price: CheckoutPrice,
    ):
        self._accounts_port = accounts_port
        self._stripe_port = stripe_port
        self._price = price

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        user = self._accounts_port.get_user_by_id(user_id=command.user_id)
        if user is None:
            raise UserNotFoundError("User not found.")

        customer_id = self._ensure_customer(user)

        result = self._stripe_port.create_checkout_session(
            user_id=user.id,
            customer_id=customer_id,
            price=self._price,
            success_url=command.success_url,
            cancel_url=command.cancel_url,
        )
        logger.info("checkout: session created user_id=%s session_id=%s", user.id, result.id)
        return CreateCheckoutSessionOutput(
            checkout_session_id=result.id,
            checkout_url=result.url,
        )

    def _ensure_customer(self, user: User) -> str:
        if user.stripe_customer_id:
            return user.stripe_customer_id

        customer_id = self._stripe_port.create_customer(user_id=user.id, email=user.email)
        if self._accounts_port.set_stripe_customer_id_if_absent(
            user_id=user.id,
            stripe_customer_id=customer_id,
        ):
            return customer_id

        # A concurrent checkout stored its customer first; that one wins.
        current = self._accounts_port.get_user_by_id(user_id=user.id)
        if current is None:
            raise UserNotFoundError("User not found.")
        if current.stripe_customer_id and current.stripe_customer_id != customer_id:
            logger.warning(
                "checkout: discarded duplicate customer user_id=%s customer_id=%s",
                user.id,
                customer_id,
            )
            return current.stripe_customer_id
        return customer_id

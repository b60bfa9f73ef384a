from __future__ import annotations

import logging

from app.application.dto.billing import (
    BillingEvent,
    CheckoutCompletedEvent,
    StripeWebhookInput,
    StripeWebhookOutput,
    SubscriptionDeletedEvent,
    SubscriptionUpdatedEvent,
    UnrecognizedEvent,
)
from app.application.ports.accounts_port import AccountsPort
from app.application.ports.stripe_port import StripePort
from app.domain.entities.subscription import CANCELED_STATUS


logger = logging.getLogger(__name__)


class ProcessStripeWebhookUseCase:
    """Verify a Stripe delivery and reconcile the local subscription fields.

    Each event kind maps to exactly one write on ``users``. Events that no
    longer match a local record are acknowledged as no-ops. Provider errors
    propagate, leaving the delivery unacknowledged for Stripe to retry.
    """

    def __init__(
        self,
        *,
        accounts_port: AccountsPort,
        stripe_port: StripePort,
    ):
        self._accounts_port = accounts_port
        self._stripe_port = stripe_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)
        handled = self.dispatch(event)
        logger.info(
            "stripe_webhook: processed event_id=%s type=%s handled=%s",
            event.event_id,
            event.event_type,
            handled,
        )
        return StripeWebhookOutput(event_type=event.event_type, handled=handled)

    def dispatch(self, event: BillingEvent) -> bool:
        if isinstance(event, CheckoutCompletedEvent):
            return self._on_checkout_completed(event)
        if isinstance(event, SubscriptionUpdatedEvent):
            return self._on_subscription_updated(event)
        if isinstance(event, SubscriptionDeletedEvent):
            return self._on_subscription_deleted(event)
        if isinstance(event, UnrecognizedEvent):
            return False
        raise TypeError(f"Unsupported billing event: {type(event).__name__}")

    def _on_checkout_completed(self, event: CheckoutCompletedEvent) -> bool:
        if event.mode != "subscription":
            return False
        if not event.user_id:
            logger.warning("stripe_webhook: checkout without user_id metadata event_id=%s", event.event_id)
            return False
        if not event.subscription_id:
            logger.warning("stripe_webhook: checkout without subscription event_id=%s", event.event_id)
            return False

        subscription = self._stripe_port.retrieve_subscription(subscription_id=event.subscription_id)
        updated = self._accounts_port.set_subscription(
            user_id=event.user_id,
            subscription_id=subscription.subscription_id,
            status=subscription.status,
        )
        if updated == 0:
            logger.warning(
                "stripe_webhook: no user for checkout user_id=%s subscription_id=%s",
                event.user_id,
                subscription.subscription_id,
            )
            return False
        return True

    def _on_subscription_updated(self, event: SubscriptionUpdatedEvent) -> bool:
        updated = self._accounts_port.update_subscription_status_by_subscription_id(
            subscription_id=event.subscription_id,
            status=event.status,
        )
        if updated == 0:
            logger.warning("stripe_webhook: no user for subscription_id=%s", event.subscription_id)
            return False
        if updated > 1:
            logger.warning(
                "stripe_webhook: subscription_id=%s matched %s users",
                event.subscription_id,
                updated,
            )
        return True

    def _on_subscription_deleted(self, event: SubscriptionDeletedEvent) -> bool:
        updated = self._accounts_port.clear_subscription_by_subscription_id(
            subscription_id=event.subscription_id,
            status=CANCELED_STATUS,
        )
        if updated == 0:
            logger.warning("stripe_webhook: no user for deleted subscription_id=%s", event.subscription_id)
            return False
        return True

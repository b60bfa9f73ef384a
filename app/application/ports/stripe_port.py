from __future__ import annotations

from typing import Protocol

from app.application.dto.billing import (
    BillingEvent,
    CheckoutPrice,
    StripeCheckoutSessionResult,
    StripeSubscriptionSnapshot,
)


class StripePort(Protocol):
    def create_customer(self, *, user_id: str, email: str) -> str:
        ...

    def create_checkout_session(
        self,
        *,
        user_id: str,
        customer_id: str,
        price: CheckoutPrice,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        ...

    def retrieve_subscription(self, *, subscription_id: str) -> StripeSubscriptionSnapshot:
        ...

    def verify_webhook(self, *, signature: str | None, payload: bytes) -> BillingEvent:
        ...

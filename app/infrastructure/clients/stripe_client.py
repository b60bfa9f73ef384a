from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import stripe

from app.application.dto.billing import (
    BillingEvent,
    CheckoutCompletedEvent,
    CheckoutPrice,
    StripeCheckoutSessionResult,
    StripeSubscriptionSnapshot,
    SubscriptionDeletedEvent,
    SubscriptionUpdatedEvent,
    UnrecognizedEvent,
)
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import BillingProviderError, InvalidInputError, InvalidSignatureError


logger = logging.getLogger(__name__)


class StripeClient(StripePort):
    """Stripe adapter. The API key is passed per request; module-level
    ``stripe.api_key`` is never set."""

    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        tolerance_seconds: int = stripe.Webhook.DEFAULT_TOLERANCE,
    ):
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._tolerance_seconds = tolerance_seconds

    def create_customer(self, *, user_id: str, email: str) -> str:
        try:
            customer = stripe.Customer.create(
                api_key=self._secret_key,
                idempotency_key=f"customer-create-{user_id}",
                email=email,
                metadata={"user_id": user_id},
            )
        except stripe.StripeError as exc:
            logger.exception("stripe_client: customer creation failed user_id=%s", user_id)
            raise BillingProviderError("Failed to create Stripe customer.") from exc

        customer_id = getattr(customer, "id", None)
        if not customer_id:
            raise BillingProviderError("Stripe customer id is missing.")
        return str(customer_id)

    def create_checkout_session(
        self,
        *,
        user_id: str,
        customer_id: str,
        price: CheckoutPrice,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        payload: dict = {
            "mode": "subscription",
            "customer": customer_id,
            "payment_method_types": ["card"],
            "line_items": [_line_item(price)],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "client_reference_id": user_id,
            "metadata": {"user_id": user_id},
        }

        try:
            session = stripe.checkout.Session.create(api_key=self._secret_key, **payload)
        except stripe.StripeError as exc:
            logger.exception("stripe_client: checkout session creation failed user_id=%s", user_id)
            raise BillingProviderError("Failed to create Stripe checkout session.") from exc

        session_id = getattr(session, "id", None)
        session_url = getattr(session, "url", None)
        if not session_id or not session_url:
            raise BillingProviderError("Stripe checkout session response is incomplete.")

        return StripeCheckoutSessionResult(id=str(session_id), url=str(session_url))

    def retrieve_subscription(self, *, subscription_id: str) -> StripeSubscriptionSnapshot:
        try:
            subscription = stripe.Subscription.retrieve(subscription_id, api_key=self._secret_key)
        except stripe.StripeError as exc:
            logger.exception("stripe_client: subscription retrieval failed subscription_id=%s", subscription_id)
            raise BillingProviderError("Failed to retrieve Stripe subscription.") from exc

        return StripeSubscriptionSnapshot(
            subscription_id=str(subscription.id),
            status=str(subscription.status),
        )

    def verify_webhook(self, *, signature: str | None, payload: bytes) -> BillingEvent:
        if not signature:
            raise InvalidSignatureError("Missing Stripe-Signature header.")

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidSignatureError("Webhook payload is not valid UTF-8.") from exc

        try:
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self._webhook_secret,
                self._tolerance_seconds,
            )
        except stripe.SignatureVerificationError as exc:
            raise InvalidSignatureError("Invalid Stripe webhook signature.") from exc

        try:
            event = json.loads(body)
        except ValueError as exc:
            raise InvalidInputError("Webhook payload is not valid JSON.") from exc

        return parse_billing_event(event)


def parse_billing_event(event: Any) -> BillingEvent:
    if not isinstance(event, Mapping):
        raise InvalidInputError("Webhook event must be a JSON object.")

    event_type = event.get("type")
    if not event_type or not isinstance(event_type, str):
        raise InvalidInputError("Webhook event is missing 'type'.")
    event_id = str(event.get("id") or "")

    data = event.get("data")
    data_object = data.get("object") if isinstance(data, Mapping) else None
    if not isinstance(data_object, Mapping):
        data_object = {}

    if event_type == "checkout.session.completed":
        metadata = data_object.get("metadata") or {}
        user_id = metadata.get("user_id") or data_object.get("client_reference_id")
        return CheckoutCompletedEvent(
            event_id=event_id,
            event_type=event_type,
            mode=data_object.get("mode"),
            user_id=str(user_id) if user_id else None,
            subscription_id=_object_id(data_object.get("subscription")),
        )

    if event_type == "customer.subscription.updated":
        subscription_id = _object_id(data_object)
        status = data_object.get("status")
        if not subscription_id or not status:
            raise InvalidInputError("Subscription event is missing id or status.")
        return SubscriptionUpdatedEvent(
            event_id=event_id,
            event_type=event_type,
            subscription_id=subscription_id,
            status=str(status),
        )

    if event_type == "customer.subscription.deleted":
        subscription_id = _object_id(data_object)
        if not subscription_id:
            raise InvalidInputError("Subscription event is missing id.")
        return SubscriptionDeletedEvent(
            event_id=event_id,
            event_type=event_type,
            subscription_id=subscription_id,
        )

    return UnrecognizedEvent(event_id=event_id, event_type=event_type)


def _object_id(value: Any) -> str | None:
    # Stripe sends either a bare id or the expanded object.
    if isinstance(value, Mapping):
        value = value.get("id")
    if not value:
        return None
    return str(value)


def _line_item(price: CheckoutPrice) -> dict:
    if price.price_id:
        return {"price": price.price_id, "quantity": 1}
    return {
        "price_data": {
            "currency": price.currency,
            "product_data": {"name": price.product_name},
            "unit_amount": price.amount_cents,
            "recurring": {"interval": price.interval},
        },
        "quantity": 1,
    }

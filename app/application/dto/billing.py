from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    user_id: str
    success_url: str
    cancel_url: str


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    checkout_session_id: str
    checkout_url: str


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str | None
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool


@dataclass(frozen=True)
class ManualActivationInput:
    user_id: str | None
    subscription_id: str | None


@dataclass(frozen=True)
class ManualActivationOutput:
    user_id: str
    subscription_id: str


@dataclass(frozen=True)
class StripeCheckoutSessionResult:
    id: str
    url: str


@dataclass(frozen=True)
class StripeSubscriptionSnapshot:
    subscription_id: str
    status: str


@dataclass(frozen=True)
class CheckoutPrice:
    price_id: str | None
    amount_cents: int
    currency: str
    interval: str
    product_name: str


@dataclass(frozen=True)
class CheckoutCompletedEvent:
    event_id: str
    event_type: str
    mode: str | None
    user_id: str | None
    subscription_id: str | None


@dataclass(frozen=True)
class SubscriptionUpdatedEvent:
    event_id: str
    event_type: str
    subscription_id: str
    status: str


@dataclass(frozen=True)
class SubscriptionDeletedEvent:
    event_id: str
    event_type: str
    subscription_id: str


@dataclass(frozen=True)
class UnrecognizedEvent:
    event_id: str
    event_type: str


BillingEvent = Union[
    CheckoutCompletedEvent,
    SubscriptionUpdatedEvent,
    SubscriptionDeletedEvent,
    UnrecognizedEvent,
]

from __future__ import annotations

import asyncio
from dataclasses import replace

from fastapi.testclient import TestClient

from app.api.deps import (
    get_activate_subscription_manually_use_case,
    get_create_checkout_session_use_case,
    get_current_user_id,
    get_process_stripe_webhook_use_case,
)
from app.application.dto.billing import StripeSubscriptionSnapshot, StripeWebhookOutput
from app.application.use_cases.activate_subscription_manually import ActivateSubscriptionManuallyUseCase
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.domain.exceptions import BillingProviderError
from app.main import app, create_app
from app.shared.config import get_settings
from support import FakeAccountsPort, FakeStripePort, make_user, stripe_event


class ThreadCheckingWebhookUseCase:
    def __init__(self):
        self.ran_on_event_loop: bool | None = None

    def execute(self, _command):
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.ran_on_event_loop = False
        else:
            self.ran_on_event_loop = True
        return StripeWebhookOutput(event_type="invoice.created", handled=False)


class ExplodingWebhookUseCase:
    def execute(self, _command):
        raise RuntimeError("database unavailable")


def _override_webhook(accounts_port: FakeAccountsPort, stripe_port: FakeStripePort) -> None:
    app.dependency_overrides[get_process_stripe_webhook_use_case] = lambda: ProcessStripeWebhookUseCase(
        accounts_port=accounts_port,
        stripe_port=stripe_port,
    )


def test_webhook_acknowledges_valid_delivery(accounts_port, stripe_port):
    stripe_port.subscriptions["sub_1"] = StripeSubscriptionSnapshot(subscription_id="sub_1", status="active")
    _override_webhook(accounts_port, stripe_port)
    payload = stripe_event(
        "checkout.session.completed",
        {"mode": "subscription", "subscription": "sub_1", "metadata": {"user_id": "user-1"}},
    )

    client = TestClient(app)
    response = client.post(
        "/v1/billing/webhook",
        content=payload,
        headers={"Stripe-Signature": stripe_port.sign(payload), "Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json()["received"] is True
    assert accounts_port.users["user-1"].subscription_status == "active"

    app.dependency_overrides.clear()


def test_webhook_acknowledges_unknown_event_type(accounts_port, stripe_port):
    _override_webhook(accounts_port, stripe_port)
    payload = stripe_event("invoice.created", {"id": "in_1"})

    client = TestClient(app)
    response = client.post("/v1/billing/webhook", content=payload, headers={"Stripe-Signature": stripe_port.sign(payload)})

    assert response.status_code == 200
    assert response.json() == {"received": True, "event_type": "invoice.created", "handled": False}

    app.dependency_overrides.clear()


def test_webhook_rejects_bad_or_missing_signature(accounts_port, stripe_port):
    _override_webhook(accounts_port, stripe_port)
    payload = stripe_event("customer.subscription.deleted", {"id": "sub_1"})

    client = TestClient(app)
    bad = client.post("/v1/billing/webhook", content=payload, headers={"Stripe-Signature": "t=1,v1=bad"})
    missing = client.post("/v1/billing/webhook", content=payload)

    assert bad.status_code == 400
    assert missing.status_code == 400
    assert accounts_port.writes == 0

    app.dependency_overrides.clear()


def test_webhook_provider_failure_returns_500_for_retry(accounts_port, stripe_port):
    stripe_port.fail_with = BillingProviderError("Failed to retrieve Stripe subscription.")
    _override_webhook(accounts_port, stripe_port)
    payload = stripe_event(
        "checkout.session.completed",
        {"mode": "subscription", "subscription": "sub_1", "metadata": {"user_id": "user-1"}},
    )

    client = TestClient(app)
    response = client.post("/v1/billing/webhook", content=payload, headers={"Stripe-Signature": stripe_port.sign(payload)})

    assert response.status_code == 500
    assert accounts_port.users["user-1"].subscription_id is None

    app.dependency_overrides.clear()


def test_webhook_unexpected_failure_returns_generic_500():
    app.dependency_overrides[get_process_stripe_webhook_use_case] = lambda: ExplodingWebhookUseCase()

    client = TestClient(app)
    response = client.post("/v1/billing/webhook", content=b"{}", headers={"Stripe-Signature": "sig"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Webhook handler failed."

    app.dependency_overrides.clear()


def test_checkout_session_returns_redirect_url(accounts_port, stripe_port, checkout_price):
    app.dependency_overrides[get_current_user_id] = lambda: "user-1"
    app.dependency_overrides[get_create_checkout_session_use_case] = lambda: CreateCheckoutSessionUseCase(
        accounts_port=accounts_port,
        stripe_port=stripe_port,
        price=checkout_price,
    )

    client = TestClient(app)
    response = client.post("/v1/billing/checkout-session")

    assert response.status_code == 200
    assert response.json() == {"url": "https://checkout.stripe.test/cs_1"}
    assert stripe_port.sessions[0]["success_url"].endswith("/dashboard?success=true")
    assert stripe_port.sessions[0]["cancel_url"].endswith("/dashboard?canceled=true")

    app.dependency_overrides.clear()


def test_checkout_session_unknown_user_returns_404(stripe_port, checkout_price):
    app.dependency_overrides[get_current_user_id] = lambda: "ghost"
    app.dependency_overrides[get_create_checkout_session_use_case] = lambda: CreateCheckoutSessionUseCase(
        accounts_port=FakeAccountsPort(make_user()),
        stripe_port=stripe_port,
        price=checkout_price,
    )

    client = TestClient(app)
    response = client.post("/v1/billing/checkout-session")

    assert response.status_code == 404

    app.dependency_overrides.clear()


def test_checkout_session_provider_failure_returns_500(accounts_port, stripe_port, checkout_price):
    stripe_port.fail_with = BillingProviderError("Failed to create Stripe customer.")
    app.dependency_overrides[get_current_user_id] = lambda: "user-1"
    app.dependency_overrides[get_create_checkout_session_use_case] = lambda: CreateCheckoutSessionUseCase(
        accounts_port=accounts_port,
        stripe_port=stripe_port,
        price=checkout_price,
    )

    client = TestClient(app)
    response = client.post("/v1/billing/checkout-session")

    assert response.status_code == 500

    app.dependency_overrides.clear()


def test_manual_activation_is_not_mounted_by_default():
    client = TestClient(create_app(replace(get_settings(), enable_manual_activation=False)))

    response = client.post("/v1/billing/manual-activate", json={"userId": "user-1", "subscriptionId": "sub_1"})

    assert response.status_code == 404


def test_manual_activation_when_enabled(accounts_port):
    application = create_app(replace(get_settings(), enable_manual_activation=True))
    application.dependency_overrides[get_activate_subscription_manually_use_case] = (
        lambda: ActivateSubscriptionManuallyUseCase(accounts_port=accounts_port)
    )

    client = TestClient(application)
    ok = client.post("/v1/billing/manual-activate", json={"userId": "user-1", "subscriptionId": "sub_manual"})
    missing = client.post("/v1/billing/manual-activate", json={"userId": "user-1"})
    unknown = client.post("/v1/billing/manual-activate", json={"userId": "ghost", "subscriptionId": "sub_1"})

    assert ok.status_code == 200
    assert accounts_port.users["user-1"].subscription_status == "active"
    assert missing.status_code == 400
    assert unknown.status_code == 404


def test_webhook_runs_use_case_off_the_event_loop():
    use_case = ThreadCheckingWebhookUseCase()
    app.dependency_overrides[get_process_stripe_webhook_use_case] = lambda: use_case

    client = TestClient(app)
    response = client.post("/v1/billing/webhook", content=b"{}", headers={"Stripe-Signature": "sig"})

    assert response.status_code == 200
    assert use_case.ran_on_event_loop is False

    app.dependency_overrides.clear()

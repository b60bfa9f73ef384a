from __future__ import annotations

import json
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from app.application.dto.auth import AccessToken, AccessTokenClaims
from app.application.dto.billing import (
    StripeCheckoutSessionResult,
    StripeSubscriptionSnapshot,
)
from app.domain.entities.user import User
from app.domain.exceptions import BillingProviderError, InvalidSignatureError
from app.infrastructure.clients.stripe_client import parse_billing_event


def make_user(**overrides) -> User:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    values = {
        "id": "user-1",
        "email": "alice@example.com",
        "password_hash": "hashed::12345678",
        "role": "USER",
        "subscription_status": None,
        "subscription_id": None,
        "stripe_customer_id": None,
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return User(**values)


class FakeAccountsPort:
    def __init__(self, *users: User):
        self.users: dict[str, User] = {user.id: user for user in users}
        self.writes = 0
        self.lose_customer_race_to: str | None = None

    def get_user_by_id(self, *, user_id: str) -> User | None:
        return self.users.get(user_id)

    def get_user_by_email(self, *, email: str) -> User | None:
        for user in self.users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    def list_users(self) -> list[User]:
        return sorted(self.users.values(), key=lambda user: user.created_at, reverse=True)

    def create_user(self, *, user_id, email, password_hash, role, created_at) -> User:
        user = make_user(
            id=user_id,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=created_at,
            updated_at=created_at,
        )
        self.users[user.id] = user
        return user

    def set_stripe_customer_id_if_absent(self, *, user_id: str, stripe_customer_id: str) -> bool:
        if self.lose_customer_race_to is not None:
            # Another request stores its customer between our read and write.
            self.users[user_id] = replace(self.users[user_id], stripe_customer_id=self.lose_customer_race_to)
            self.lose_customer_race_to = None
        user = self.users.get(user_id)
        if user is None or user.stripe_customer_id is not None:
            return False
        self.users[user_id] = replace(user, stripe_customer_id=stripe_customer_id)
        self.writes += 1
        return True

    def set_subscription(self, *, user_id: str, subscription_id: str, status: str) -> int:
        user = self.users.get(user_id)
        if user is None:
            return 0
        self.users[user_id] = replace(user, subscription_id=subscription_id, subscription_status=status)
        self.writes += 1
        return 1

    def update_subscription_status_by_subscription_id(self, *, subscription_id: str, status: str) -> int:
        return self._update_matching(subscription_id, subscription_status=status)

    def clear_subscription_by_subscription_id(self, *, subscription_id: str, status: str) -> int:
        return self._update_matching(subscription_id, subscription_status=status, subscription_id=None)

    def _update_matching(self, match_id: str, /, **changes) -> int:
        matched = [user for user in self.users.values() if user.subscription_id == match_id]
        for user in matched:
            self.users[user.id] = replace(user, **changes)
            self.writes += 1
        return len(matched)


class FakeStripePort:
    def __init__(self, *, webhook_secret: str = "whsec_test"):
        self.webhook_secret = webhook_secret
        self.customers: list[dict] = []
        self.sessions: list[dict] = []
        self.subscriptions: dict[str, StripeSubscriptionSnapshot] = {}
        self.fail_with: BillingProviderError | None = None

    def sign(self, payload: bytes) -> str:
        return f"sig:{self.webhook_secret}:{len(payload)}"

    def create_customer(self, *, user_id: str, email: str) -> str:
        self._maybe_fail()
        customer_id = f"cus_{len(self.customers) + 1}"
        self.customers.append({"id": customer_id, "user_id": user_id, "email": email})
        return customer_id

    def create_checkout_session(self, *, user_id, customer_id, price, success_url, cancel_url):
        self._maybe_fail()
        session_id = f"cs_{len(self.sessions) + 1}"
        self.sessions.append(
            {
                "id": session_id,
                "user_id": user_id,
                "customer_id": customer_id,
                "price": price,
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )
        return StripeCheckoutSessionResult(id=session_id, url=f"https://checkout.stripe.test/{session_id}")

    def retrieve_subscription(self, *, subscription_id: str) -> StripeSubscriptionSnapshot:
        self._maybe_fail()
        return self.subscriptions[subscription_id]

    def verify_webhook(self, *, signature, payload: bytes):
        if signature != self.sign(payload):
            raise InvalidSignatureError("Invalid Stripe webhook signature.")
        return parse_billing_event(json.loads(payload))

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with


class FakePasswordHasher:
    def hash_password(self, password: str) -> str:
        return f"hashed::{password}"

    def verify_password(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{password}"


class FakeTokenPort:
    def issue_access_token(self, *, user_id: str, now: datetime) -> AccessToken:
        return AccessToken(token=f"access-{user_id}", expires_at=now + timedelta(minutes=15))

    def read_access_token(self, *, token: str) -> AccessTokenClaims:
        user_id = token.removeprefix("access-")
        if user_id == token:
            raise ValueError("Invalid access token.")
        return AccessTokenClaims(user_id=user_id, expires_at=datetime.now(timezone.utc) + timedelta(minutes=15))


def stripe_event(event_type: str, data_object: dict, event_id: str = "evt_1") -> bytes:
    return json.dumps({"id": event_id, "type": event_type, "data": {"object": data_object}}).encode("utf-8")



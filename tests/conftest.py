from __future__ import annotations

import pytest

from app.application.dto.billing import CheckoutPrice
from support import FakeAccountsPort, FakeStripePort, make_user


@pytest.fixture
def accounts_port() -> FakeAccountsPort:
    return FakeAccountsPort(make_user())


@pytest.fixture
def stripe_port() -> FakeStripePort:
    return FakeStripePort()


@pytest.fixture
def checkout_price() -> CheckoutPrice:
    return CheckoutPrice(
        price_id=None,
        amount_cents=999,
        currency="usd",
        interval="month",
        product_name="SaaS Demo Subscription",
    )

from __future__ import annotations


# Statuses are copied verbatim from Stripe; only these two have meaning here.
ACTIVE_STATUS = "active"
CANCELED_STATUS = "canceled"

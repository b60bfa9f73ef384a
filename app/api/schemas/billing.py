from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateCheckoutSessionResponse(BaseModel):
    url: str


class StripeWebhookResponse(BaseModel):
    received: bool = True
    event_type: str
    handled: bool


class ManualActivationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    subscription_id: str | None = Field(default=None, alias="subscriptionId")


class ManualActivationResponse(BaseModel):
    message: str
    user_id: str
    subscription_id: str

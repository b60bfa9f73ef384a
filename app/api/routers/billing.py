from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from app.api.deps import (
    get_activate_subscription_manually_use_case,
    get_create_checkout_session_use_case,
    get_current_user_id,
    get_process_stripe_webhook_use_case,
)
from app.api.schemas.billing import (
    CreateCheckoutSessionResponse,
    ManualActivationRequest,
    ManualActivationResponse,
    StripeWebhookResponse,
)
from app.application.dto.billing import (
    CreateCheckoutSessionInput,
    ManualActivationInput,
    StripeWebhookInput,
)
from app.application.use_cases.activate_subscription_manually import ActivateSubscriptionManuallyUseCase
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.domain.exceptions import (
    BillingProviderError,
    InvalidInputError,
    InvalidSignatureError,
    UserNotFoundError,
)
from app.shared.config import get_settings


logger = logging.getLogger(__name__)

router = APIRouter()

# Mounted only when ENABLE_MANUAL_ACTIVATION is set.
manual_activation_router = APIRouter()


@router.post("/v1/billing/checkout-session", response_model=CreateCheckoutSessionResponse)
def create_checkout_session(
    user_id: str = Depends(get_current_user_id),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    settings = get_settings()
    try:
        output = use_case.execute(
            CreateCheckoutSessionInput(
                user_id=user_id,
                success_url=settings.checkout_success_url,
                cancel_url=settings.checkout_cancel_url,
            )
        )
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except BillingProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return CreateCheckoutSessionResponse(url=output.checkout_url)


@router.post("/v1/billing/webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    payload = await request.body()
    try:
        # Stripe and database calls block; keep them off the event loop.
        output = await run_in_threadpool(
            use_case.execute,
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            ),
        )
    except InvalidSignatureError as exc:
        logger.warning("stripe_webhook: rejected delivery reason=%s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except InvalidInputError as exc:
        logger.warning("stripe_webhook: malformed event reason=%s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except BillingProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("stripe_webhook: handler failed")
        raise HTTPException(status_code=500, detail="Webhook handler failed.") from exc

    return StripeWebhookResponse(event_type=output.event_type, handled=output.handled)


@manual_activation_router.post("/v1/billing/manual-activate", response_model=ManualActivationResponse)
def manual_activate(
    req: ManualActivationRequest,
    use_case: ActivateSubscriptionManuallyUseCase = Depends(get_activate_subscription_manually_use_case),
):
    try:
        output = use_case.execute(
            ManualActivationInput(
                user_id=req.user_id,
                subscription_id=req.subscription_id,
            )
        )
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return ManualActivationResponse(
        message="Subscription activated successfully",
        user_id=output.user_id,
        subscription_id=output.subscription_id,
    )

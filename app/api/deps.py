from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from app.application.dto.billing import CheckoutPrice
from app.application.use_cases.activate_subscription_manually import ActivateSubscriptionManuallyUseCase
from app.application.use_cases.add_video import AddVideoUseCase
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.get_me import GetMeUseCase
from app.application.use_cases.list_users import ListUsersUseCase
from app.application.use_cases.list_videos import ListVideosUseCase
from app.application.use_cases.login_local import LoginLocalUseCase
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.application.use_cases.register_user import RegisterUserUseCase
from app.domain.entities.user import User
from app.domain.exceptions import AdminRequiredError, SubscriptionRequiredError
from app.domain.services.entitlements import has_active_subscription, is_admin
from app.infrastructure.clients.stripe_client import StripeClient
from app.infrastructure.db.engine import get_engine
from app.infrastructure.db.repositories.accounts_repository import SqlAccountsRepository
from app.infrastructure.db.repositories.videos_repository import SqlVideosRepository
from app.infrastructure.security.password_hasher import Argon2PasswordHasher
from app.infrastructure.security.token_service import JwtTokenService
from app.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.database_url:
        raise HTTPException(status_code=500, detail="DATABASE_URL is required.")
    return get_engine(settings.database_url)


def get_accounts_repository() -> SqlAccountsRepository:
    return SqlAccountsRepository(_get_db_engine())


def get_videos_repository() -> SqlVideosRepository:
    return SqlVideosRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_password_hasher() -> Argon2PasswordHasher:
    return Argon2PasswordHasher()


def get_token_service() -> JwtTokenService:
    settings = get_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


def _get_stripe_client() -> StripeClient:
    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is required.")
    if not settings.stripe_webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_WEBHOOK_SECRET is required.")
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
    )


def _get_checkout_price() -> CheckoutPrice:
    settings = get_settings()
    return CheckoutPrice(
        price_id=settings.stripe_price_id or None,
        amount_cents=settings.stripe_price_amount_cents,
        currency=settings.stripe_price_currency,
        interval=settings.stripe_price_interval,
        product_name=settings.stripe_product_name,
    )


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        accounts_port=get_accounts_repository(),
        password_hasher=_get_password_hasher(),
    )


def get_login_local_use_case() -> LoginLocalUseCase:
    return LoginLocalUseCase(
        accounts_port=get_accounts_repository(),
        password_hasher=_get_password_hasher(),
        token_port=get_token_service(),
    )


def get_get_me_use_case() -> GetMeUseCase:
    return GetMeUseCase()


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(accounts_port=get_accounts_repository())


def get_list_videos_use_case() -> ListVideosUseCase:
    return ListVideosUseCase(videos_port=get_videos_repository())


def get_add_video_use_case() -> AddVideoUseCase:
    return AddVideoUseCase(videos_port=get_videos_repository())


def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(
        accounts_port=get_accounts_repository(),
        stripe_port=_get_stripe_client(),
        price=_get_checkout_price(),
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(
        accounts_port=get_accounts_repository(),
        stripe_port=_get_stripe_client(),
    )


def get_activate_subscription_manually_use_case() -> ActivateSubscriptionManuallyUseCase:
    return ActivateSubscriptionManuallyUseCase(accounts_port=get_accounts_repository())


def get_current_user_id(
    authorization: str | None = Header(default=None),
    token_service: JwtTokenService = Depends(get_token_service),
) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    try:
        claims = token_service.read_access_token(token=token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return claims.user_id


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    accounts_repository: SqlAccountsRepository = Depends(get_accounts_repository),
) -> User:
    # Loaded on every request; role and subscription status are never
    # taken from the token.
    user = accounts_repository.get_user_by_id(user_id=user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found.")
    return user


def require_active_subscription(user: User = Depends(get_current_user)) -> User:
    if not has_active_subscription(user):
        raise HTTPException(
            status_code=403,
            detail=str(SubscriptionRequiredError("Active subscription required.")),
        )
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not is_admin(user):
        raise HTTPException(
            status_code=403,
            detail=str(AdminRequiredError("Admin role required.")),
        )
    return user

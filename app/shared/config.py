from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: bool = False) -> bool:
    value = _env(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _list(name: str, default: str) -> list[str]:
    value = _env(name, default) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    jwt_access_ttl_minutes: int
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_price_id: str
    stripe_price_amount_cents: int
    stripe_price_currency: str
    stripe_price_interval: str
    stripe_product_name: str
    app_base_url: str
    enable_manual_activation: bool
    cors_allow_origins: list[str]
    log_level: str
    admin_email: str
    admin_password: str

    @property
    def checkout_success_url(self) -> str:
        return f"{self.app_base_url.rstrip('/')}/dashboard?success=true"

    @property
    def checkout_cancel_url(self) -> str:
        return f"{self.app_base_url.rstrip('/')}/dashboard?canceled=true"


def get_settings() -> Settings:
    return Settings(
        database_url=_env("DATABASE_URL", "sqlite:///./dev.db"),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "60")),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_price_id=_env("STRIPE_PRICE_ID", ""),
        stripe_price_amount_cents=int(_env("STRIPE_PRICE_AMOUNT_CENTS", "999")),
        stripe_price_currency=_env("STRIPE_PRICE_CURRENCY", "usd"),
        stripe_price_interval=_env("STRIPE_PRICE_INTERVAL", "month"),
        stripe_product_name=_env("STRIPE_PRODUCT_NAME", "SaaS Demo Subscription"),
        app_base_url=_env("APP_BASE_URL", "http://localhost:3000"),
        enable_manual_activation=_bool("ENABLE_MANUAL_ACTIVATION"),
        cors_allow_origins=_list("CORS_ALLOW_ORIGINS", "*"),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        admin_email=_env("ADMIN_EMAIL", "admin@example.com"),
        admin_password=_env("ADMIN_PASSWORD", ""),
    )

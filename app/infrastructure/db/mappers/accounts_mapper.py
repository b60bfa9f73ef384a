from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from app.domain.entities.user import User


def _as_str(value: Any) -> str:
    return str(value)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=_as_str(row["id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        role=row["role"],
        subscription_status=row.get("subscription_status"),
        subscription_id=row.get("subscription_id"),
        stripe_customer_id=row.get("stripe_customer_id"),
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )

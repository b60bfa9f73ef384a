from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.exc import IntegrityError

from app.application.ports.accounts_port import AccountsPort
from app.application.use_cases.common import utcnow
from app.domain.exceptions import EmailAlreadyExistsError
from app.infrastructure.db.mappers.accounts_mapper import map_row_to_user


_USER_COLUMNS = """
    id, email, password_hash, role, subscription_status, subscription_id,
    stripe_customer_id, created_at, updated_at
"""


def _select_users(sql: str):
    return text(sql).columns(
        created_at=DateTime(timezone=True),
        updated_at=DateTime(timezone=True),
    )


def _write(sql: str, *timestamps: str):
    return text(sql).bindparams(*(bindparam(name, type_=DateTime(timezone=True)) for name in timestamps))


class SqlAccountsRepository(AccountsPort):
    def __init__(self, engine):
        self._engine = engine

    def get_user_by_id(self, *, user_id: str):
        sql = f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE id = :user_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(_select_users(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def get_user_by_email(self, *, email: str):
        sql = f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE lower(email) = :email
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(_select_users(sql), {"email": email.lower()}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def list_users(self):
        sql = f"""
            SELECT {_USER_COLUMNS}
            FROM users
            ORDER BY created_at DESC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(_select_users(sql)).mappings().all()
        return [map_row_to_user(row) for row in rows]

    def create_user(
        self,
        *,
        user_id: str,
        email: str,
        password_hash: str,
        role: str,
        created_at: datetime,
    ):
        sql = """
            INSERT INTO users (
                id, email, password_hash, role, created_at, updated_at
            ) VALUES (
                :id, :email, :password_hash, :role, :created_at, :updated_at
            )
        """
        params = {
            "id": user_id,
            "email": email,
            "password_hash": password_hash,
            "role": role,
            "created_at": created_at,
            "updated_at": created_at,
        }
        try:
            with self._engine.begin() as conn:
                conn.execute(_write(sql, "created_at", "updated_at"), params)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email.
            raise EmailAlreadyExistsError("Email already in use.") from exc
        user = self.get_user_by_id(user_id=user_id)
        if user is None:
            raise RuntimeError(f"User {user_id} missing after insert.")
        return user

    def set_stripe_customer_id_if_absent(self, *, user_id: str, stripe_customer_id: str) -> bool:
        sql = """
            UPDATE users
            SET stripe_customer_id = :stripe_customer_id,
                updated_at = :now
            WHERE id = :user_id
              AND stripe_customer_id IS NULL
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                _write(sql, "now"),
                {
                    "user_id": user_id,
                    "stripe_customer_id": stripe_customer_id,
                    "now": utcnow(),
                },
            )
        return result.rowcount == 1

    def set_subscription(self, *, user_id: str, subscription_id: str, status: str) -> int:
        sql = """
            UPDATE users
            SET subscription_id = :subscription_id,
                subscription_status = :status,
                updated_at = :now
            WHERE id = :user_id
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                _write(sql, "now"),
                {
                    "user_id": user_id,
                    "subscription_id": subscription_id,
                    "status": status,
                    "now": utcnow(),
                },
            )
        return result.rowcount

    def update_subscription_status_by_subscription_id(self, *, subscription_id: str, status: str) -> int:
        sql = """
            UPDATE users
            SET subscription_status = :status,
                updated_at = :now
            WHERE subscription_id = :subscription_id
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                _write(sql, "now"),
                {
                    "subscription_id": subscription_id,
                    "status": status,
                    "now": utcnow(),
                },
            )
        return result.rowcount

    def clear_subscription_by_subscription_id(self, *, subscription_id: str, status: str) -> int:
        sql = """
            UPDATE users
            SET subscription_status = :status,
                subscription_id = NULL,
                updated_at = :now
            WHERE subscription_id = :subscription_id
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                _write(sql, "now"),
                {
                    "subscription_id": subscription_id,
                    "status": status,
                    "now": utcnow(),
                },
            )
        return result.rowcount

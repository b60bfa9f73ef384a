from __future__ import annotations

import logging
from uuid import uuid4

from app.application.ports.password_hasher_port import PasswordHasherPort
from app.application.use_cases.common import normalize_email, utcnow
from app.infrastructure.db.engine import create_schema, get_engine
from app.infrastructure.db.repositories.accounts_repository import SqlAccountsRepository


logger = logging.getLogger(__name__)


def seed_admin(engine, *, email: str, password: str, password_hasher: PasswordHasherPort) -> bool:
    """Create the ADMIN user unless one with ``email`` already exists.

    Returns True when a user was created.
    """
    if not password:
        raise ValueError("ADMIN_PASSWORD is required to seed the admin user.")

    repository = SqlAccountsRepository(engine)
    email = normalize_email(email)
    if repository.get_user_by_email(email=email) is not None:
        logger.info("seed_admin: admin already exists email=%s", email)
        return False

    repository.create_user(
        user_id=str(uuid4()),
        email=email,
        password_hash=password_hasher.hash_password(password),
        role="ADMIN",
        created_at=utcnow(),
    )
    logger.info("seed_admin: admin created email=%s", email)
    return True


def main() -> None:
    from app.infrastructure.security.password_hasher import Argon2PasswordHasher
    from app.shared.config import get_settings

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    engine = get_engine(settings.database_url)
    create_schema(engine)
    seed_admin(
        engine,
        email=settings.admin_email,
        password=settings.admin_password,
        password_hasher=Argon2PasswordHasher(),
    )


if __name__ == "__main__":
    main()

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=4)
def get_engine(dsn: str) -> Engine:
    if dsn.startswith("sqlite"):
        options: dict = {"connect_args": {"check_same_thread": False}}
        if dsn in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return create_engine(dsn, future=True, **options)
    return create_engine(dsn, future=True, pool_pre_ping=True)


def create_schema(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata.
    from app.infrastructure.db.models import accounts, videos  # noqa: F401

    Base.metadata.create_all(engine)

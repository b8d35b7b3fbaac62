# backend/realty_api/db/db_connection.py
from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from realty_api.core.settings import get_settings


def _install_statement_timeout(engine: Engine, timeout_ms: int) -> None:
    # Server-side deadline for every statement, set on connect
    @event.listens_for(engine, "connect")
    def _set_statement_timeout(dbapi_conn, conn_record):
        with dbapi_conn.cursor() as cur:
            cur.execute(f"SET statement_timeout = {int(timeout_ms)}")


@lru_cache
def get_engine() -> Engine:
    """Create the sync engine lazily so importing the app never needs a live DB."""
    settings = get_settings()
    engine = create_engine(
        settings.DATABASE_URL,
        echo=False,
        future=True,
        pool_pre_ping=True,
    )
    if settings.DB_STATEMENT_TIMEOUT_MS and engine.dialect.name == "postgresql":
        _install_statement_timeout(engine, settings.DB_STATEMENT_TIMEOUT_MS)
    return engine


@lru_cache
def _session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)


def SessionLocal() -> Session:
    return _session_factory()()


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

"""Pytest configuration and fixtures."""

from datetime import datetime
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from realty_api.db import Base, get_db, import_all_models


@pytest.fixture
def now() -> datetime:
    """Fixed clock for current-year reports."""
    return datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite shared by every session of one test."""
    eng = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    import_all_models()
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    db = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    """API client whose ``get_db`` dependency points at the SQLite engine."""
    from realty_api.main import app

    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _get_test_db() -> Iterator[Session]:
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

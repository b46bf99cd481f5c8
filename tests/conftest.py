"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Settings are read once and cached, so the environment must be prepared
# before anything under kpoint is imported.
# ---------------------------------------------------------------------------
os.environ.setdefault("KPOINT_DATABASE_URL", "sqlite://")
os.environ.setdefault("KPOINT_QUARTERLY_RESET_ENABLED", "false")
os.environ.setdefault("KPOINT_CREATE_TABLES_ON_STARTUP", "false")

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from kpoint.core.database import Base, get_db  # noqa: E402
from kpoint.models import Account  # noqa: E402

NOW = datetime(2025, 4, 10, 14, 0, 0)


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all K-Point tables.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Provide a session that rolls back after each test."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


def make_account(
    session: Session,
    account_id: str,
    *,
    balance: int = 20,
    department: str = "Sales",
    role: str = "user",
    is_active: bool = True,
    first_name: str | None = None,
    last_name: str | None = None,
) -> Account:
    """Insert an account directly, bypassing the directory service."""
    account = Account(
        id=account_id,
        first_name=first_name or account_id.capitalize(),
        last_name=last_name or "Test",
        department=department,
        role=role,
        point_balance=balance,
        is_active=is_active,
    )
    session.add(account)
    session.flush()
    return account


@pytest.fixture
def client(db_engine: Engine):
    """FastAPI TestClient whose sessions are bound to the test engine."""
    from fastapi.testclient import TestClient

    from kpoint.main import app

    def _override_get_db():
        with Session(db_engine) as session:
            try:
                yield session
            except Exception:
                session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


def auth(account_id: str) -> dict:
    return {"X-Account-Id": account_id}

"""
Fixtures for the agent ingest tests.

The ``vouchers`` and ``sales_by_customer`` tables live in a throwaway SQLite
database; the app's ``get_db`` dependency is pointed at it per test.
"""
from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models import SalesByCustomerModel, VoucherModel  # noqa: F401  register models
from app.main import app

# one shared connection, otherwise every checkout gets an empty :memory: db
_LEDGER_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_LedgerSession = sessionmaker(autocommit=False, autoflush=False, bind=_LEDGER_ENGINE)


@contextmanager
def _serving(session):
    def _session_override():
        yield session

    app.dependency_overrides[get_db] = _session_override
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _ledger_tables():
    Base.metadata.create_all(bind=_LEDGER_ENGINE)
    yield
    Base.metadata.drop_all(bind=_LEDGER_ENGINE)


@pytest.fixture()
def db():
    session = _LedgerSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    with _serving(db) as c:
        yield c


@pytest.fixture()
def unconfigured_client():
    """Client whose repository has no session, as when DATABASE_URL is unset."""
    with _serving(None) as c:
        yield c

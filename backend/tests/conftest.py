# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from api.deps import get_charger_store
from db import SessionLocal, get_db
from main import app
from models import Base
from models.charger import Charger  # noqa: F401 - register with Base
from models.partner import Partner  # noqa: F401
from status_core.partner_cache import PartnerIdentityCache
from status_core.status_cache import ChargerStatusCache
from status_core.store import ChargerStore


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    eng = _get_engine()
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture
def db_connection(engine):
    """Connection with an outer transaction rolled back after the test; tables emptied as well."""
    connection = engine.connect()
    trans = connection.begin()
    try:
        yield connection
    finally:
        if trans.is_active:
            trans.rollback()
        connection.close()
        # pysqlite may have committed on RELEASE SAVEPOINT; make sure nothing leaks.
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())


def _session_on(connection):
    return Session(bind=connection, join_transaction_mode="create_savepoint")


@pytest.fixture
def db_session(db_connection):
    """Function-scoped session; repository commits become savepoints inside the test transaction."""
    session = _session_on(db_connection)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_connection):
    """ChargerStore whose per-call sessions share the test connection."""
    return ChargerStore(lambda: _session_on(db_connection))


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def status_cache():
    """Fresh status cache per test (installed on app.state by the client fixture)."""
    return ChargerStatusCache()


@pytest.fixture
def partner_cache():
    """Fresh partner cache per test (installed on app.state by the client fixture)."""
    return PartnerIdentityCache()


@pytest.fixture
def client(db_session, store, status_cache, partner_cache):
    """API test client bound to the test DB, store and fresh caches; overrides cleared on teardown."""
    app.state.status_cache = status_cache
    app.state.partner_cache = partner_cache
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    app.dependency_overrides[get_charger_store] = lambda: store
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()

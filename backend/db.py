"""Database engine and session factory for the charger status store (SQLite dev/tests, any SQLAlchemy URL in prod)."""
from collections.abc import Generator
import os

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from utils.config import DATABASE_URL

_is_sqlite = DATABASE_URL.startswith("sqlite")

# Runtime safety: when TESTING=true, refuse anything that looks like the real database.
if os.environ.get("TESTING") == "true":
    _path = DATABASE_URL.split("?")[0]
    if "charger_status.db" in _path or (":memory:" not in _path and "test" not in _path.lower()):
        raise RuntimeError(
            "Tests must not run against production. Set TESTING_DATABASE_URL to sqlite:///:memory: "
            "(or another test URL containing :memory: or 'test')."
        )

if _is_sqlite:
    # Store calls run in threadpool workers, so the sqlite connection must cross threads.
    _engine_kw: dict = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in DATABASE_URL:
        # One shared connection so every session sees the same in-memory DB.
        _engine_kw["poolclass"] = StaticPool
else:
    _engine_kw = {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}

engine = create_engine(DATABASE_URL, echo=False, **_engine_kw)

if _is_sqlite:

    @event.listens_for(engine, "connect")
    def _sqlite_fk(dbapi_conn, connection_record):
        # charger.partner_id must reference an existing partner.
        dbapi_conn.execute("PRAGMA foreign_keys=ON")

# expire_on_commit=False: rows are turned into snapshots after commit without a reload.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for the synchronous partner routes: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

"""
SQLAlchemy engine/session setup and a FastAPI dependency to get a DB session.
"""

from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from sqlalchemy.pool import StaticPool
from .config import settings


def build_engine(url: str) -> Engine:
    """
    Create an engine; SQLite gets thread-safe connect args and WAL pragmas.
    An in-memory SQLite URL shares one connection so every session sees the same tables.
    """
    is_sqlite = url.startswith("sqlite")
    kwargs = {"future": True, "pool_pre_ping": True}
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
        if url in {"sqlite://", "sqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
    eng = create_engine(url, **kwargs)

    if is_sqlite:
        @event.listens_for(eng, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):
            cur = dbapi_connection.cursor()
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.close()

    return eng


# Create a DB engine from config (SQLite by default for easy local dev)
engine = build_engine(settings.database_url)

# Session factory (autoflush False avoids surprising implicit writes)
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

# Declarative Base for models to inherit from
class Base(DeclarativeBase):
    pass


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables. Called from the app startup hook."""
    from . import models  # noqa: F401  registers the tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a SQLAlchemy session.
    Rolls back whatever the request left uncommitted and closes the session.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

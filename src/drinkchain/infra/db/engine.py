"""SQLModel engine for the local key-value store, with WAL pragmas on SQLite."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Field, SQLModel, create_engine

from drinkchain.config import settings

_engine: Engine | None = None


class StoredValue(SQLModel, table=True):
    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def _set_wal_mode(dbapi_conn, _):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA journal_mode=WAL")
    cur.execute("PRAGMA synchronous=NORMAL")
    cur.close()


def make_engine(url: str) -> Engine:
    """Create an engine for *url* and make sure its tables exist."""
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(url, echo=False, connect_args={"check_same_thread": False} if url.startswith("sqlite") else {})
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _set_wal_mode)
    SQLModel.metadata.create_all(engine)
    return engine


def get_engine() -> Engine:
    """Process-wide engine for ``settings.DATABASE_URL``, created on first use."""
    global _engine
    if _engine is None:
        _engine = make_engine(settings.DATABASE_URL)
    return _engine

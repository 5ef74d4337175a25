"""Key-value storage capability injected into the strategy store.

``read`` returns ``None`` for a missing key. Backend failures surface as
``PersistenceError``; callers decide how to degrade.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from drinkchain.domain.exceptions import PersistenceError
from drinkchain.infra.db.engine import StoredValue, get_engine


@runtime_checkable
class KeyValueStorage(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class SQLiteKeyValueStorage:
    """One row per key in the ``storedvalue`` table; writes replace the whole value."""

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = get_engine()
        return self._engine

    def read(self, key: str) -> str | None:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredValue, key)
                return row.value if row is not None else None
        except (SQLAlchemyError, OSError) as exc:
            raise PersistenceError(f"Failed to read {key!r}: {exc}") from exc

    def write(self, key: str, value: str) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredValue, key)
                if row is None:
                    row = StoredValue(key=key, value=value)
                else:
                    row.value = value
                    row.updated_at = datetime.now(timezone.utc)
                session.add(row)
                session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise PersistenceError(f"Failed to write {key!r}: {exc}") from exc

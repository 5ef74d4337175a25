import pytest
from sqlalchemy import text

from drinkchain.domain.exceptions import PersistenceError
from drinkchain.infra.db.engine import make_engine
from drinkchain.infra.storage import KeyValueStorage, SQLiteKeyValueStorage
from drinkchain.strategies.store import StrategyStore


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'nested' / 'kv.db'}")
    yield engine
    engine.dispose()


def test_creates_parent_directory(tmp_path, engine):
    assert (tmp_path / "nested" / "kv.db").exists()


def test_wal_mode_enabled(engine):
    with engine.connect() as conn:
        mode = conn.execute(text("PRAGMA journal_mode")).scalar()
    assert mode.lower() == "wal"


def test_read_missing_key(engine):
    assert SQLiteKeyValueStorage(engine).read("absent") is None


def test_write_replaces_value(engine):
    storage = SQLiteKeyValueStorage(engine)
    storage.write("k", "one")
    storage.write("k", "two")
    assert storage.read("k") == "two"
    assert SQLiteKeyValueStorage(engine).read("k") == "two"


def test_satisfies_protocol(engine):
    assert isinstance(SQLiteKeyValueStorage(engine), KeyValueStorage)


def test_strategy_store_survives_restart(engine):
    created = StrategyStore(SQLiteKeyValueStorage(engine)).create("夏季", ["甜度", "保质期", "包装"])
    reloaded = StrategyStore(SQLiteKeyValueStorage(engine))
    assert reloaded.list() == [created]


def test_backend_errors_become_persistence_errors(engine):
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE storedvalue"))
    storage = SQLiteKeyValueStorage(engine)
    with pytest.raises(PersistenceError):
        storage.read("k")
    with pytest.raises(PersistenceError):
        storage.write("k", "v")

import pytest

from zeux_coach.utils import database
from zeux_coach.utils.database import PostgresKeyValueStore


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params=None):
        if self.conn.fail:
            raise RuntimeError("query failed")
        self.conn.executed.append((query, params))

    def fetchone(self):
        return self.conn.row


class FakeConnection:
    def __init__(self, row=None, fail=False):
        self.row = row
        self.fail = fail
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


def store_with(conn):
    return PostgresKeyValueStore(connect=lambda: conn, table="test_storage")


def test_get_item_returns_value_and_closes():
    conn = FakeConnection(row=('[{"name": "Oats"}]',))
    assert store_with(conn).get_item("@zeux_foods") == '[{"name": "Oats"}]'
    assert conn.executed[0][1] == ("@zeux_foods",)
    assert conn.closed


def test_get_item_missing_key():
    conn = FakeConnection(row=None)
    assert store_with(conn).get_item("@zeux_foods") is None
    assert conn.closed


def test_set_item_commits():
    conn = FakeConnection()
    store_with(conn).set_item("@zeux_settings", "{}")

    assert conn.executed[0][1] == ("@zeux_settings", "{}")
    assert conn.committed
    assert conn.closed


def test_multi_remove_passes_key_list():
    conn = FakeConnection()
    store_with(conn).multi_remove(key for key in ("a", "b"))
    assert conn.executed[0][1] == (["a", "b"],)
    assert conn.committed


def test_failed_write_rolls_back_and_raises():
    conn = FakeConnection(fail=True)
    with pytest.raises(RuntimeError):
        store_with(conn).set_item("@zeux_foods", "[]")

    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed


def test_create_table_commits():
    conn = FakeConnection()
    store_with(conn).create_table()
    assert len(conn.executed) == 1
    assert conn.committed


def test_connection_error_is_reraised(monkeypatch, capsys):
    def refuse(**kwargs):
        raise ConnectionError("refused")

    monkeypatch.setattr(database.psycopg2, "connect", refuse)

    with pytest.raises(ConnectionError):
        database.get_db_connection()
    assert "Database Connection Error" in capsys.readouterr().out

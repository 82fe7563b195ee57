import psycopg2
import pytest

from db import connection
from db.init_db import SCHEMA_SQL, create_tables


@pytest.fixture(autouse=True)
def _no_pool(monkeypatch):
    monkeypatch.setattr(connection, "_pool", None)


def test_get_pool_before_init_raises():
    with pytest.raises(RuntimeError):
        connection.get_pool()


def test_init_pool_without_dsn_raises(monkeypatch):
    monkeypatch.setattr(connection, "DATABASE_URL", "")
    with pytest.raises(RuntimeError):
        connection.init_pool()


def test_init_pool_is_idempotent_and_closes(monkeypatch):
    created = []

    class StubPool:
        def __init__(self, minconn, maxconn, dsn):
            created.append((minconn, maxconn, dsn))
            self.closed = False

        def closeall(self):
            self.closed = True

    monkeypatch.setattr(connection.pool, "ThreadedConnectionPool", StubPool)

    p = connection.init_pool("postgresql://x@localhost/test", 1, 3)
    assert connection.init_pool() is p
    assert connection.get_pool() is p
    assert created == [(1, 3, "postgresql://x@localhost/test")]

    connection.close_pool()
    assert p.closed
    with pytest.raises(RuntimeError):
        connection.get_pool()


def test_create_tables_runs_schema(fake_pool):
    create_tables(fake_pool)

    sql, _ = fake_pool.conn.executed[0]
    assert sql == " ".join(SCHEMA_SQL.split())
    assert "GEOGRAPHY(POINT, 4326)" in sql
    assert "REFERENCES messages(id)" in sql
    assert fake_pool.conn.commits == 1
    assert fake_pool.returned == 1


def test_create_tables_keeps_original_error_when_connection_dropped(fake_pool):
    fake_pool.conn.fail_on_statement(1, psycopg2.OperationalError("server closed"))
    fake_pool.conn.rollback_error = psycopg2.InterfaceError("connection already closed")

    with pytest.raises(psycopg2.OperationalError):
        create_tables(fake_pool)
    assert fake_pool.conn.rollbacks == 1
    assert fake_pool.returned == 1

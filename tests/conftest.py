import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        # Whitespace-normalized so tests can match on single-line SQL.
        self.conn.executed.append((" ".join(sql.split()), params))
        if self.conn.fail_at == len(self.conn.executed):
            raise self.conn.error
        self._rows = self.conn.results.pop(0) if self.conn.results else []

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    """Records statements and serves one scripted result set per execute()."""

    def __init__(self):
        self.executed = []
        self.results = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_at = None
        self.error = None
        self.rollback_error = None

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1
        if self.rollback_error is not None:
            raise self.rollback_error

    def fail_on_statement(self, n, error):
        """Make the n-th executed statement (1-based) raise `error`."""
        self.fail_at = n
        self.error = error


class FakePool:
    def __init__(self, getconn_error=None):
        self.conn = FakeConnection()
        self.getconn_error = getconn_error
        self.borrowed = 0
        self.returned = 0

    def getconn(self):
        if self.getconn_error is not None:
            raise self.getconn_error
        self.borrowed += 1
        return self.conn

    def putconn(self, conn):
        assert conn is self.conn
        self.returned += 1


@pytest.fixture()
def fake_pool():
    return FakePool()

"""Tests for URL dialect detection and the SQLite connection provider"""

import pytest

from db import connection
from db.handle import DatabaseHandle


class TestDetectDialect:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("postgresql://u:p@localhost:5432/db", "postgresql"),
            ("postgres://u@localhost/db", "postgresql"),
            ("postgresql+psycopg2://u@localhost/db", "postgresql"),
            ("sqlite:///demo.db", "sqlite"),
            ("sqlite://", "sqlite"),
        ],
    )
    def test_supported(self, url, expected):
        assert connection.detect_dialect(url) == expected

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported database URL scheme"):
            connection.detect_dialect("mysql://u@localhost/db")


class TestSQLitePath:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("sqlite://", ":memory:"),
            ("sqlite:///demo.db", "demo.db"),
            ("sqlite:////tmp/demo.db", "/tmp/demo.db"),
        ],
    )
    def test_path(self, url, expected):
        assert connection._sqlite_path(url) == expected


class TestSQLitePool:
    def test_uninitialized_pool(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            connection.get_connection()
        with pytest.raises(RuntimeError):
            connection.get_dialect()

    def test_shared_connection(self):
        connection.init_pool("sqlite://")
        assert connection.get_dialect() == "sqlite"
        conn = connection.get_connection()
        connection.release_connection(conn)
        assert connection.get_connection() is conn

    def test_default_handle_uses_pool(self):
        connection.init_pool("sqlite://")
        handle = DatabaseHandle()
        assert handle.dialect == "sqlite"
        handle.execute("CREATE TABLE t (x INTEGER)")

    def test_close_pool_resets(self):
        connection.init_pool("sqlite://")
        connection.close_pool()
        with pytest.raises(RuntimeError):
            connection.get_connection()

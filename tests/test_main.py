"""End-to-end tests for the demo entry point"""

import logging

import pytest

import main
from db import connection
from db.errors import StorageError
from db.handle import DatabaseHandle


class TestRun:
    """The three steps against an in-memory database."""

    def test_returns_joshes(self, handle: DatabaseHandle):
        customers = main.run(handle)
        assert [(c.first_name, c.last_name) for c in customers] == [
            ("Josh", "Bloch"),
            ("Josh", "Long"),
        ]

    def test_log_lines(self, handle: DatabaseHandle, caplog):
        caplog.set_level(logging.INFO)
        main.run(handle)
        assert caplog.messages[0] == "Creating tables"
        assert "Querying for customer records where first_name = 'Josh':" in caplog.messages
        assert "Customer(id=3, firstName=Josh, lastName=Bloch)" in caplog.messages
        assert "Customer(id=4, firstName=Josh, lastName=Long)" in caplog.messages

    def test_rerun_is_idempotent(self, handle: DatabaseHandle):
        main.run(handle)
        assert len(main.run(handle)) == 2


class TestMain:
    """Process-level behaviour."""

    def test_main_succeeds_on_sqlite(self, monkeypatch):
        monkeypatch.setattr(main, "init_pool", lambda: connection.init_pool("sqlite://"))
        main.main()
        with pytest.raises(RuntimeError):
            connection.get_connection()

    def test_failure_exits_non_zero(self, monkeypatch, caplog):
        monkeypatch.setattr(main, "init_pool", lambda: connection.init_pool("sqlite://"))

        def broken_run(handle):
            raise StorageError("permission denied")

        monkeypatch.setattr(main, "run", broken_run)

        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 1
        assert "Customer demo failed." in caplog.messages

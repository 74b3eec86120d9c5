"""Unit tests for session logging setup and teardown."""

from __future__ import annotations

import logging

import pytest

from autostarter import __version__
from autostarter.common.errors import AutostartError
from autostarter.session.session_logging import (
    logFormatWithVersion_get,
    logging_setup,
    logging_teardown,
)


class TestSessionLogging:
    """Handler lifecycle."""

    def test_setup_adds_and_teardown_removes_handlers(self, tmp_path) -> None:
        log_file = tmp_path / "autostart.log"
        root = logging.getLogger()

        handlers = logging_setup("info", "%(message)s", str(log_file))
        try:
            assert len(handlers) == 2
            assert all(h in root.handlers for h in handlers)
            assert root.level == logging.INFO
            logging.getLogger("autostarter.test").warning("written to file")
        finally:
            logging_teardown(handlers)

        assert not any(h in root.handlers for h in handlers)
        assert "written to file" in log_file.read_text()

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            logging_setup("chatty", "%(message)s", None)

    def test_unopenable_log_file_raises_fatal(self, tmp_path) -> None:
        root = logging.getLogger()
        before = list(root.handlers)

        with pytest.raises(AutostartError, match="Cannot open log file"):
            logging_setup("info", "%(message)s", str(tmp_path / "missing" / "a.log"))

        assert root.handlers == before

    def test_version_injected_after_timestamp(self) -> None:
        fmt = logFormatWithVersion_get("%(asctime)s %(message)s")
        assert fmt == f"%(asctime)s [v{__version__}] %(message)s"

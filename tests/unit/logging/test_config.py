"""Unit tests for logging configuration."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from release_gateway.logging.config import (
    LOG_FILE_NAME,
    RETENTION_DAYS,
    _HANDLER_MARKER,
    _cleanup_old_logs,
    _setup_file_logging,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Any:
    """Remove handlers added by configure_logging after each test."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    yield
    root.handlers = original_handlers


def _age(path: Path, days: int) -> None:
    old_time = (datetime.now() - timedelta(days=days)).timestamp()
    os.utime(path, (old_time, old_time))


@pytest.mark.unit
class TestCleanupOldLogs:
    """Tests for _cleanup_old_logs."""

    def test_returns_early_when_log_dir_missing(self, tmp_path: Path) -> None:
        """Should not raise when the log directory does not exist."""
        with patch("release_gateway.logging.config.LOG_DIR", tmp_path / "missing"):
            _cleanup_old_logs()

    def test_deletes_old_log_files(self, tmp_path: Path) -> None:
        """Should delete rotated logs older than the retention window."""
        log_file = tmp_path / f"{LOG_FILE_NAME}.1"
        log_file.write_text("old")
        _age(log_file, RETENTION_DAYS + 5)

        with patch("release_gateway.logging.config.LOG_DIR", tmp_path):
            _cleanup_old_logs()

        assert not log_file.exists()

    def test_keeps_recent_and_foreign_files(self, tmp_path: Path) -> None:
        """Should keep recent logs and files that are not gateway logs."""
        recent = tmp_path / LOG_FILE_NAME
        recent.write_text("recent")
        foreign = tmp_path / "other.log"
        foreign.write_text("other")
        _age(foreign, RETENTION_DAYS + 5)

        with patch("release_gateway.logging.config.LOG_DIR", tmp_path):
            _cleanup_old_logs()

        assert recent.exists()
        assert foreign.exists()


@pytest.mark.unit
class TestSetupFileLogging:
    """Tests for _setup_file_logging."""

    def test_creates_log_directory_and_handler(self, tmp_path: Path) -> None:
        """Should create the log dir and attach a rotating file handler."""
        log_dir = tmp_path / "logs"

        with patch("release_gateway.logging.config.LOG_DIR", log_dir):
            root = logging.getLogger()
            initial_count = len(root.handlers)
            _setup_file_logging()

            assert len(root.handlers) == initial_count + 1
            assert log_dir.exists()
            root.handlers[-1].close()


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.parametrize(
        ("kwargs", "level"),
        [
            ({"debug": True}, logging.DEBUG),
            ({"verbose": True}, logging.INFO),
            ({}, logging.WARNING),
        ],
    )
    def test_console_level(self, kwargs: dict[str, bool], level: int) -> None:
        """Console handler level should follow the verbosity flags."""
        configure_logging(log_to_file=False, **kwargs)

        root = logging.getLogger()
        assert root.handlers[-1].level == level

    def test_reconfigure_replaces_handlers(self) -> None:
        """Calling twice should not stack console handlers."""
        configure_logging(log_to_file=False)
        configure_logging(verbose=True, log_to_file=False)

        installed = [
            h for h in logging.getLogger().handlers if getattr(h, _HANDLER_MARKER, False)
        ]
        assert len(installed) == 1

    def test_file_logging_is_optional(self) -> None:
        """log_to_file=False should skip the file handler."""
        with patch("release_gateway.logging.config._setup_file_logging") as setup:
            configure_logging(log_to_file=False)
            setup.assert_not_called()
            configure_logging(json_output=True)
            setup.assert_called_once()

    def test_server_loggers_propagate(self) -> None:
        """uvicorn loggers should propagate to the root handlers."""
        logging.getLogger("uvicorn.access").handlers = [logging.NullHandler()]

        configure_logging(log_to_file=False)

        access = logging.getLogger("uvicorn.access")
        assert access.handlers == []
        assert access.propagate is True


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger."""

    def test_returns_logger(self) -> None:
        """Should return a structlog logger."""
        assert get_logger("test") is not None

    def test_binds_initial_context(self) -> None:
        """Should accept initial context."""
        assert get_logger("test", component="api", release="web") is not None

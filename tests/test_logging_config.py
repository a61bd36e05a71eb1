"""Tests for the shared logging setup."""

import logging
from unittest.mock import patch

from hexpic.utils.logging_config import DEFAULT_LOG_DIR, setup_logging


def _file_handlers(mock_basic):
    handlers = mock_basic.call_args.kwargs["handlers"]
    return [h for h in handlers if isinstance(h, logging.FileHandler)]


class TestSetupLogging:
    def test_stderr_only_by_default(self):
        with patch("hexpic.utils.logging_config.logging.basicConfig") as basic:
            assert setup_logging() is None
        assert basic.call_args.kwargs["level"] == logging.INFO
        assert _file_handlers(basic) == []

    def test_server_name_log_file(self, tmp_path):
        with patch("hexpic.utils.logging_config.logging.basicConfig") as basic:
            path = setup_logging(server_name="ascii_server", log_dir=tmp_path / "logs")
        assert path == str(tmp_path / "logs" / "ascii_server.log")
        assert (tmp_path / "logs").is_dir()
        handlers = _file_handlers(basic)
        assert len(handlers) == 1
        handlers[0].close()

    def test_default_log_dir(self):
        with patch("hexpic.utils.logging_config.logging.basicConfig"), \
             patch("hexpic.utils.logging_config.RotatingFileHandler"), \
             patch("hexpic.utils.logging_config.Path.mkdir"):
            path = setup_logging(server_name="svc")
        assert path == str(DEFAULT_LOG_DIR / "svc.log")

    def test_explicit_log_file_wins(self, tmp_path):
        target = tmp_path / "custom.log"
        with patch("hexpic.utils.logging_config.logging.basicConfig") as basic:
            path = setup_logging(log_file=str(target), server_name="ignored", log_dir=tmp_path / "x")
        assert path == str(target)
        assert not (tmp_path / "x").exists()
        _file_handlers(basic)[0].close()

    def test_debug_overrides_level(self):
        with patch("hexpic.utils.logging_config.logging.basicConfig") as basic:
            setup_logging(level=logging.WARNING, debug=True)
        assert basic.call_args.kwargs["level"] == logging.DEBUG

    def test_http_loggers_quieted(self):
        with patch("hexpic.utils.logging_config.logging.basicConfig"):
            setup_logging()
            assert logging.getLogger("httpx").level == logging.WARNING
            setup_logging(debug=True)
            assert logging.getLogger("httpx").level == logging.DEBUG

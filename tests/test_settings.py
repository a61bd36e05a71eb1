"""Tests for environment-driven settings and .env loading."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from hexpic.config.settings import Settings, get_settings, reset_settings


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch):
        for name in ("HEXPIC_FETCH_TIMEOUT", "HEXPIC_WORKERS", "HEXPIC_PORT", "HEXPIC_LOG_DIR"):
            monkeypatch.delenv(name, raising=False)
        s = Settings.from_env()
        assert s.fetch_timeout == 10.0
        assert s.workers == 1
        assert s.port == 8090
        assert s.log_dir is None

    def test_reads_values(self, monkeypatch):
        monkeypatch.setenv("HEXPIC_FETCH_TIMEOUT", "2.5")
        monkeypatch.setenv("HEXPIC_MAX_DOWNLOAD_BYTES", "1024")
        monkeypatch.setenv("HEXPIC_PORT", "9000")
        monkeypatch.setenv("HEXPIC_LOG_DIR", "/tmp/hexpic-logs")
        s = Settings.from_env()
        assert s.fetch_timeout == 2.5
        assert s.max_download_bytes == 1024
        assert s.port == 9000
        assert s.log_dir == "/tmp/hexpic-logs"

    def test_invalid_value_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("HEXPIC_PORT", "not-a-port")
        with caplog.at_level("WARNING", logger="hexpic.config.settings"):
            s = Settings.from_env()
        assert s.port == 8090
        assert "HEXPIC_PORT" in caplog.text

    def test_blank_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("HEXPIC_FETCH_TIMEOUT", "   ")
        assert Settings.from_env().fetch_timeout == 10.0

    @pytest.mark.parametrize("raw", ["0", "-4"])
    def test_workers_floor(self, monkeypatch, raw):
        monkeypatch.setenv("HEXPIC_WORKERS", raw)
        assert Settings.from_env().workers == 1

    def test_to_dict(self):
        d = Settings().to_dict()
        assert d["host"] == "0.0.0.0"
        assert d["max_source_pixels"] == 50_000_000


class TestGetSettings:
    def test_cached_until_reset(self, monkeypatch):
        monkeypatch.setenv("HEXPIC_WORKERS", "2")
        first = get_settings()
        monkeypatch.setenv("HEXPIC_WORKERS", "5")
        assert get_settings() is first
        reset_settings()
        assert get_settings().workers == 5


class TestDotenv:
    def test_dotenv_feeds_settings(self, tmp_path: Path, monkeypatch):
        env_path = tmp_path / ".env"
        env_path.write_text("HEXPIC_MAX_SOURCE_PIXELS=1234\n")
        monkeypatch.delenv("HEXPIC_MAX_SOURCE_PIXELS", raising=False)
        try:
            load_dotenv(env_path)
            assert get_settings().max_source_pixels == 1234
        finally:
            os.environ.pop("HEXPIC_MAX_SOURCE_PIXELS", None)

    def test_dotenv_does_not_override_existing(self, tmp_path: Path, monkeypatch):
        env_path = tmp_path / ".env"
        env_path.write_text("HEXPIC_PORT=1111\n")
        monkeypatch.setenv("HEXPIC_PORT", "2222")
        load_dotenv(env_path)
        assert get_settings().port == 2222

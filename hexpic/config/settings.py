"""
Runtime settings for hexpic, read from environment variables.

Entry points call ``load_dotenv()`` first so a local ``.env`` file can supply
values. All modules should use ``get_settings()`` instead of reading the
environment directly.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import asdict, dataclass
from typing import Callable, Optional, TypeVar

logger = logging.getLogger("hexpic.config.settings")

T = TypeVar("T")


def _env(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using default %r", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    fetch_timeout: float = 10.0
    max_download_bytes: int = 20 * 1024 * 1024  # 20 MB
    max_source_pixels: int = 50_000_000
    workers: int = 1
    host: str = "0.0.0.0"
    port: int = 8090
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> Settings:
        d = cls()
        return cls(
            fetch_timeout=_env("HEXPIC_FETCH_TIMEOUT", d.fetch_timeout, float),
            max_download_bytes=_env("HEXPIC_MAX_DOWNLOAD_BYTES", d.max_download_bytes, int),
            max_source_pixels=_env("HEXPIC_MAX_SOURCE_PIXELS", d.max_source_pixels, int),
            workers=max(1, _env("HEXPIC_WORKERS", d.workers, int)),
            host=_env("HEXPIC_HOST", d.host, str),
            port=_env("HEXPIC_PORT", d.port, int),
            log_dir=_env("HEXPIC_LOG_DIR", d.log_dir, str),
        )

    def to_dict(self) -> dict:
        return asdict(self)


_settings: Optional[Settings] = None
_lock = threading.Lock()


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment on first use."""
    global _settings
    with _lock:
        if _settings is None:
            _settings = Settings.from_env()
        return _settings


def reset_settings() -> None:
    """Forget cached settings so the next ``get_settings()`` re-reads the environment."""
    global _settings
    with _lock:
        _settings = None

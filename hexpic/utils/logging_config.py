"""Logging setup shared by the hexpic entry points.

The server writes to stderr and ``logs/ascii_server.log``; the CLI logs to
stderr only, at WARNING unless ``--debug`` is given:

    setup_logging(server_name="ascii_server", log_dir=get_settings().log_dir)
    setup_logging(level=logging.WARNING, debug=args.debug)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUPS = 3

DEFAULT_LOG_DIR = Path.cwd() / "logs"

# Chatty per-request loggers from the HTTP stack; raised to WARNING unless debugging.
QUIET_LOGGERS = ("httpx", "httpcore", "multipart")


def _log_path(server_name: str | None, log_dir: str | Path | None, log_file: str | None) -> Path | None:
    if log_file:
        return Path(log_file)
    if server_name:
        return Path(log_dir or DEFAULT_LOG_DIR) / f"{server_name}.log"
    return None


def setup_logging(
    level: int = logging.INFO,
    log_file: str | None = None,
    *,
    server_name: str | None = None,
    log_dir: str | Path | None = None,
    debug: bool = False,
) -> str | None:
    """Install stderr (and optionally rotating file) handlers on the root logger.

    *log_file* wins over ``<log_dir>/<server_name>.log``. Returns the file
    path in use, or None when logging to stderr only.
    """
    level = logging.DEBUG if debug else level
    path = _log_path(server_name, log_dir, log_file)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    if path is None:
        return None
    logging.getLogger("hexpic").info("Logging to %s", path)
    return str(path)

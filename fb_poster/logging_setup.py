from __future__ import annotations

import logging
from contextlib import suppress
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fb_poster.env import env_str, env_truthy

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def ensure_file_logging(*, log_dir: Path, filename: str = "fb-poster.log") -> Path:
    """Attach a rotating file handler to the root logger (idempotent).

    Plays well with uvicorn's own logging config; we only add a handler.
    """

    if env_truthy("FB_POSTER_DISABLE_FILE_LOG"):
        return log_dir / filename

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (log_dir / filename).resolve()

    root = logging.getLogger()
    for h in root.handlers:
        if getattr(h, "_fb_poster_file_log", False):
            base = getattr(h, "baseFilename", None)
            return Path(str(base)).resolve() if base else log_file
        base = getattr(h, "baseFilename", None)
        if base and Path(str(base)).resolve() == log_file:
            return log_file

    handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler._fb_poster_file_log = True  # type: ignore[attr-defined]
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)

    lvl = env_str("FB_POSTER_LOG_LEVEL")
    if lvl:
        with suppress(ValueError):
            root.setLevel(lvl.upper())

    return log_file


def configure_console_logging(level: str = "warning") -> None:
    """stderr logging for the CLI; stdout carries the converted text."""

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt=LOG_DATEFMT)

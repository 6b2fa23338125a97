"""Centralized logging configuration for clearfashion.

Usage in any module:
    from clearfashion.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Catalog %s refreshed", catalog_id)

Environment:
    CLEARFASHION_LOG_LEVEL  console level name (default INFO)
    CLEARFASHION_LOG_FILE   optional path of a DEBUG-level log file
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "clearfashion"
LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONFIGURED = False


def _degrade(text: str, encoding: str) -> str:
    return text.encode(encoding, errors="backslashreplace").decode(encoding)


class SafeStreamHandler(logging.StreamHandler):
    """Writes ``\\xe9``-style escapes when the stream cannot encode a message."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record) + self.terminator
            try:
                self.stream.write(line)
            except UnicodeEncodeError:
                self.stream.write(_degrade(line, getattr(self.stream, "encoding", None) or "utf-8"))
            self.flush()
        except Exception:
            self.handleError(record)


def _level_from_env(default: int) -> int:
    name = os.environ.get("CLEARFASHION_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> None:
    """Configure the ``clearfashion`` logger (stderr console + optional file).

    Only the first call takes effect.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    level = _level_from_env(level)
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    fmt = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # stdout is reserved for CLI output (JSON pages)
    console = SafeStreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(fmt)
    root.addHandler(console)

    target = log_file or os.environ.get("CLEARFASHION_LOG_FILE")
    if not target:
        return
    target = Path(target)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(target, encoding="utf-8", delay=True)
    except OSError as exc:
        root.warning("Log file %s unavailable, console only: %s", target, exc)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    root.addHandler(fh)
    root.setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the ``clearfashion`` namespace on first use."""
    setup_logging()
    return logging.getLogger(name)

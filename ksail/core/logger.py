"""Logging for KSail: Rich console output plus an optional log file.

Every module logger is a child of the ``ksail`` package logger, which owns
the handlers. Console verbosity comes from ``KSAIL_LOG_LEVEL``; a log file
is only written when one is requested (``--log-file`` or ``KSAIL_LOG_FILE``).
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ksail.core.config import get_config

console = Console(stderr=True)

PACKAGE_LOGGER = "ksail"
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.setLevel(_level(get_config().log_level))
        root.addHandler(handler)
        root.setLevel(handler.level)
    return root


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Optional[Path]:
    """Send ``ksail`` log records to a file.

    Args:
        log_file: Target file; falls back to the ``log_file`` setting
        verbose: Record debug messages in the file

    Returns:
        The file being written, or None when no log file is configured

    A later call with another file replaces the earlier file handler.
    """
    target = log_file or get_config().log_file
    if not target:
        return None

    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    root = _package_logger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(path)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)
    root.setLevel(min(h.level for h in root.handlers))

    root.debug(f"Logging to {path}")
    return path


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` that reports through the ``ksail`` handlers.

    Args:
        name: Logger name (typically __name__)
    """
    root = _package_logger()
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return root.getChild(name)

"""
Logging configuration for seqcite.

Every module obtains its logger through get_logger(__name__). Outside the
CLI each seqcite logger writes to stderr on its own; once the CLI calls
enable_rich_logging, all records go through a single RichHandler on root.
"""

import logging
import sys

from rich.logging import RichHandler

LOG_FORMAT = "[%(asctime)s] %(levelname)s - [%(name)s] - %(message)s"


def _root_has_rich_handler() -> bool:
    return any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Configure a logger once; later calls return it untouched.

    Args:
        name: Name of the logger
        level: Logging level (default: INFO)
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    if _root_has_rich_handler():
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def enable_rich_logging(level: int = logging.WARNING) -> None:
    """
    Route all seqcite log records through a RichHandler on the root logger.

    Loggers created before this call (at import time) drop their own
    StreamHandler and propagate to root instead.
    """
    root_logger = logging.getLogger()
    if not _root_has_rich_handler():
        root_logger.addHandler(
            RichHandler(show_path=False, rich_tracebacks=True, markup=False)
        )
    root_logger.setLevel(level)

    for name, existing in list(logging.Logger.manager.loggerDict.items()):
        if not name.startswith("seqcite") or not isinstance(existing, logging.Logger):
            continue
        for handler in list(existing.handlers):
            existing.removeHandler(handler)
        existing.propagate = True
        existing.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, at the level named by SEQCITE_LOG_LEVEL."""
    from seqcite.config.settings import get_settings

    level = logging.getLevelName(get_settings().LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.WARNING
    return setup_logger(name, level)

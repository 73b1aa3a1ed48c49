"""Shared utilities."""

from seqcite.utils.logger import enable_rich_logging, get_logger, setup_logger

__all__ = ["enable_rich_logging", "get_logger", "setup_logger"]

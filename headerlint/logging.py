"""Logging helpers shared by the CLI, the runner and the service."""

from __future__ import annotations

import logging
from pathlib import Path
import sys

_LOGGER_NAME = "headerlint"
_CONSOLE_FORMAT = "[headerlint] %(levelname)s %(message)s"
_VERBOSE_CONSOLE_FORMAT = "[headerlint] %(levelname)s %(component)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ComponentFilter(logging.Filter):
    """Expose the child logger suffix (``runner``, ``fixer``...) as ``component``."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = _LOGGER_NAME + "."
        record.component = record.name[len(prefix) :] if record.name.startswith(prefix) else "main"
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the headerlint hierarchy, e.g. ``headerlint.fixer``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send headerlint logs to stderr (stdout carries reports) and optionally a file.

    ``verbose`` enables per-rule and per-pass debug output; ``quiet`` keeps only
    warnings and errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.addFilter(_ComponentFilter())
    console.setFormatter(logging.Formatter(_VERBOSE_CONSOLE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger"]

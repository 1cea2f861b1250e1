"""Logging configuration for uniform engines and the check runner.

This module contains:
- configure_logging: one-shot root logger setup for CLI entry points
- get_logger: per-module loggers

Library modules only call get_logger(__name__); handlers are installed by
entry points such as benchmarks.runner.
"""

from __future__ import annotations

import logging
from pathlib import Path

__all__ = [
    "LOG_FORMAT",
    "DATE_FORMAT",
    "configure_logging",
    "get_logger",
]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def configure_logging(
    level: int | str = logging.INFO,
    *,
    log_file: Path | None = None,
) -> None:
    """Configure the root logger.

    If the root logger already has handlers, only its level is adjusted so
    repeated calls (e.g. several runner invocations in one process) do not
    duplicate output.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
        log_file: Optional file that receives a copy of every record.

    Raises:
        ValueError: If level is an unknown level name.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for name, creating it on first use.

    Args:
        name: Logger name, usually __name__ of the caller. Defaults to
            "__main__".

    Returns:
        logging.Logger instance.
    """
    return logging.getLogger(name or "__main__")

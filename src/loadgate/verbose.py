"""Logging configuration for check runs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path, verbose: bool = False, logger_name: str = "loadgate"
) -> logging.Logger:
    """
    Configure and return a logger for a check run.

    Always writes DEBUG and above to debug_file. With verbose=True the same
    records also go to stderr.

    Args:
        debug_file: Path to debug log file (always created)
        verbose: If True, also log to stderr.
        logger_name: Name of the logger instance. Child loggers such as
            ``loadgate.stats`` propagate into it.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    # Reconfiguring: drop handlers from a previous run in this process
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
    )

    debug_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(debug_file, mode="a")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    return logger

# pipecomp.utils.logging - Logging configuration
"""Logging configuration for the CLI and REPL."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def setup_logging(
    debug: bool = False,
    log_file: Optional[Path] = None,
    level: str = "WARNING",
) -> None:
    """
    Configure logging for pipecomp.

    Args:
        debug: Enable debug logging (overrides level)
        log_file: Optional log file, rotated at 10MB
        level: Level name used when debug is off
    """
    log_level = logging.DEBUG if debug else logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    package_logger = logging.getLogger("pipecomp")
    package_logger.setLevel(log_level)
    package_logger.handlers.clear()

    # Console handler on stderr so stdout stays clean for JSON output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        package_logger.addHandler(file_handler)
        package_logger.setLevel(logging.DEBUG)

    package_logger.debug("Logging initialized (level=%s)", logging.getLevelName(log_level))

"""
Logging for the site data pipeline.

Pipeline modules log through loguru. Records always go to stderr; when
``LOG_FILE`` is set they are also written to a rotating, gz-compressed file,
so API workers and CLI runs leave a record of skipped provinces, unplaced
sites and failed sources.
"""

import os
import sys
from pathlib import Path

from loguru import logger

from pipeline.config import get_settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def logging_disabled() -> bool:
    """True when the environment opts out of sink configuration (tests)."""
    return os.environ.get("DISABLE_LOGGING") == "1"


def setup_logging(level: str | None = None, log_file: Path | None = None) -> Path | None:
    """
    Replace loguru's sinks with the configured ones.

    Args:
        level: Overrides ``LOG_LEVEL`` (e.g. "DEBUG" for ``--debug``)
        log_file: Overrides ``LOG_FILE``

    Returns:
        The log file path in use, or None when logging to stderr only
    """
    config = get_settings().pipeline
    level = (level or config.log_level).upper()
    log_file = log_file or config.log_file

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="gz",
        )

    logger.debug(f"Logging configured: level={level}, file={log_file or '-'}")
    return log_file


if not logging_disabled():
    setup_logging()

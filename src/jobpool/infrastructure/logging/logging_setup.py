"""Logging configuration for the jobpool command line tools."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from jobpool.infrastructure.logging.log_paths import get_main_log_path

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s"


def setup_logging(
    log_level_name: str = "INFO",
    console_logging: bool = False,
    log_file: Path | None = None,
    console: Console | None = None,
) -> Path:
    """Configure logging for jobpool.

    By default, logs go to a file in the system-appropriate log directory.
    Console logging can be enabled for debugging.

    Args:
        log_level_name: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_logging: If True, also log to the console via Rich
        log_file: Log file to use instead of the default location
        console: Console for the Rich handler (default: stderr)

    Returns:
        Path of the log file
    """
    log_level = logging.getLevelName(log_level_name.upper())
    if log_file is None:
        log_file = get_main_log_path()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # 10 MB per file, 3 backups
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(file_handler)

    if console_logging:
        console_handler = RichHandler(
            console=console or Console(file=sys.stderr),
            rich_tracebacks=True,
            show_path=False,
        )
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    # Let handlers filter
    root_logger.setLevel(logging.DEBUG)
    logging.getLogger("jobpool").setLevel(log_level)

    return log_file

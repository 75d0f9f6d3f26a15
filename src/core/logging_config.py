"""
Logging Configuration Module.

Sets up the root logger for the map viewer: a size-rotated log file and an
optional console stream. The level can be forced through WORLDGRID_LOG_LEVEL.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_DIR = "logs"
LOG_FILENAME = "worldgrid.log"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 5
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LEVEL_ENV_VAR = "WORLDGRID_LOG_LEVEL"


class SafeRotatingFileHandler(RotatingFileHandler):
    """
    RotatingFileHandler that skips a rollover the OS refuses on Windows.

    Windows keeps the active log locked while another process reads it,
    so the rename fails with PermissionError; logging continues in the
    current file and rotation is retried on the next record.
    """

    def doRollover(self) -> None:
        try:
            super().doRollover()
        except PermissionError:
            if sys.platform != "win32":
                raise


def _resolve_level(debug_mode: bool) -> int:
    override = os.environ.get(LEVEL_ENV_VAR)
    if override:
        level = logging.getLevelName(override.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if debug_mode else logging.INFO


def setup_logging(
    debug_mode: bool = False,
    log_to_console: bool = True,
    log_dir: Optional[str] = None,
) -> Optional[str]:
    """
    Configures the root logger. Call once at application startup.

    Args:
        debug_mode: If True, log at DEBUG instead of INFO.
        log_to_console: If True, also log to stderr.
        log_dir: Directory for the log file. Defaults to ./logs.

    Returns:
        Optional[str]: Path of the log file, or None if file logging failed.
    """
    directory = log_dir or LOG_DIR
    try:
        os.makedirs(directory, exist_ok=True)
        log_path: Optional[str] = os.path.join(directory, LOG_FILENAME)
    except OSError as e:
        print(f"Failed to create log directory {directory}: {e}")
        log_path = LOG_FILENAME

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        if isinstance(handler, SafeRotatingFileHandler):
            handler.close()

    level = _resolve_level(debug_mode)
    root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    try:
        file_handler = SafeRotatingFileHandler(
            log_path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"CRITICAL: Could not set up file logging: {e}")
        log_path = None
    else:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    logging.info("=" * 60)
    logging.info(f"WorldGrid Session Started at {datetime.now().isoformat()}")
    logging.info("=" * 60)
    return log_path


def get_logger(name: str) -> logging.Logger:
    """
    Convenience function to get a logger with the given name.

    Args:
        name (str): The name of the logger (usually __name__).

    Returns:
        logging.Logger: The logger instance.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Flushes and closes all handlers to release the log file."""
    logging.shutdown()

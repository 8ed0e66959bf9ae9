"""
Logging configuration for stdout and file output.
"""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
LOG_FILE_PREFIX = "table"

# third-party loggers that are too chatty at debug level
QUIET_LOGGERS = ("asyncio",)


def log_file_path(log_dir: Path | str, now: datetime | None = None) -> Path:
    """Datetime-stamped log file inside log_dir, e.g. logs/table_2026-01-31_14-30-00.log."""
    timestamp = (now or datetime.now(tz=UTC)).strftime(LOG_FILE_TIMESTAMP_FORMAT)
    return Path(log_dir) / f"{LOG_FILE_PREFIX}_{timestamp}.log"


def setup_logging(
    log_dir: Path | str | None = None,
    level: int = logging.INFO,
) -> Path | None:
    """
    Configure the root logger with a stdout handler and an optional file handler.

    Returns the log file path if one was created, None otherwise.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # repeated calls replace handlers instead of stacking them
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if log_dir is None:
        return None

    file_path = log_file_path(log_dir)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(file_path)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    return file_path

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config.settings import Settings

LOG_FILE_MAX_BYTES_DEFAULT = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT_DEFAULT = 5
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s.%(funcName)s:%(lineno)d] - %(message)s"


def _log_file_name(logger_name: str) -> str:
    sanitized = "".join(c if c.isalnum() or c in ["_", "-"] else "_" for c in logger_name)
    return f"{sanitized}.log"


def setup_logging(
    logger_name: str,
    log_level: Optional[int] = None,
    log_dir: Optional[Path] = None,
    log_file_max_bytes: int = LOG_FILE_MAX_BYTES_DEFAULT,
    log_file_backup_count: int = LOG_FILE_BACKUP_COUNT_DEFAULT,
    console_output: bool = True,
    file_output: bool = True,
) -> logging.Logger:
    """
    Configures and returns a logger instance.

    Args:
        logger_name: The name for the logger (e.g., "baroboard.ui").
        log_level: Minimum level to capture. Defaults to BAROBOARD_LOG_LEVEL or INFO.
        log_dir: Directory for the rotating log file. Defaults to Settings.LOGS_DIR.
        log_file_max_bytes: Maximum size of a log file before rotation.
        log_file_backup_count: Number of backup log files to keep.
        console_output: Whether to output logs to stdout.
        file_output: Whether to write a rotating log file.

    Returns:
        A configured logger instance.
    """
    level = log_level if log_level is not None else Settings.get_log_level()
    logger = logging.getLogger(logger_name)

    # Streamlit reruns the page script on every interaction
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if file_output:
        target_dir = log_dir or Settings.LOGS_DIR
        target_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            target_dir / _log_file_name(logger_name),
            maxBytes=log_file_max_bytes,
            backupCount=log_file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

"""
Logging utilities.

This module provides:
- Logger setup with console output and optional rotating file output
- A transaction log line for every interactive schedule mutation
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

TRANSACTION_LOGGER = "lesson_scheduler.transactions"


def setup_logger(
    name: str = "lesson_scheduler",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Module loggers (``logging.getLogger(__name__)``) inside the package are
    children of "lesson_scheduler", so configuring the default name
    configures the whole package.

    Args:
        name: Logger name (default: "lesson_scheduler")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/scheduler.log")
        >>> logger.info("Allocation started")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_transaction(
    action: str,
    status: str,
    message: str,
    logger: Optional[logging.Logger] = None,
    **details: Any
) -> None:
    """
    Record the outcome of one schedule mutation.

    Args:
        action: Mutation name, e.g. "lesson.move" or "lesson.restore"
        status: "success" or "error"
        message: Human-readable outcome
        logger: Logger to write to (default: the transactions logger)
        **details: Extra identifiers (lesson_id, new_lesson_id, ...)

    Examples:
        >>> log_transaction("lesson.copy", "success", "Lesson copied",
        ...                 lesson_id="lesson-1", new_lesson_id="lesson-7")
    """
    logger = logger or logging.getLogger(TRANSACTION_LOGGER)
    level = logging.INFO if status == "success" else logging.WARNING
    extra = " ".join(f"{key}={value}" for key, value in sorted(details.items()))
    logger.log(level, f"[{action}] {status}: {message}" + (f" ({extra})" if extra else ""))

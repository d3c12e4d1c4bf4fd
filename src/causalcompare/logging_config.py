"""
Logging Configuration
Sets up the global logger for the application.
"""
import logging
import sys
from typing import Optional

from causalcompare.config import LOG_FORMAT, LOG_DATE_FORMAT


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the root logger for the 'causalcompare' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("causalcompare")
    logger.setLevel(level)

    # Check if handlers already exist to avoid duplicate logs during reload/restart
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    target = f", writing to {log_file}" if log_file else ""
    logger.info(f"Logging initialized at {logging.getLevelName(level)}{target}.")
    return logger

"""Logging configuration for fintrack."""

import logging
from typing import Optional

LOGGER_NAME = "fintrack"


def setup_logging(level: str | int = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """Set up application logging on the console and optionally a file.

    Args:
        level: Log level name or number.
        log_file: Optional path of a file that receives detailed records.

    Returns:
        Configured logger instance.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers (in case this is called multiple times)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger

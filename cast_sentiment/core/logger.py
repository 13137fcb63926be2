"""Logging infrastructure setup."""

import logging
import os
from pathlib import Path

_DEFAULT_LOG_FILE = "output/pipeline.log"


def setup_logger(name: str = "cast_sentiment", log_file: str | None = None) -> logging.Logger:
    """
    Configure and return a standard logger that writes to a log file and the console.

    Args:
        name (str): The name of the logger.
        log_file (str | None): Path to the log file. Falls back to the
            ``CAST_SENTIMENT_LOG_FILE`` environment variable, then ``output/pipeline.log``.

    Returns:
        logging.Logger: The configured logger instance.
    """
    log_path = Path(log_file or os.getenv("CAST_SENTIMENT_LOG_FILE") or _DEFAULT_LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if setup is called multiple times
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(module)s.%(funcName)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


logger = setup_logger()

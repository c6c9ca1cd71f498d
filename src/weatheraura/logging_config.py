"""Shared logging configuration for weatheraura."""

import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(name: str, level: str | None = None) -> logging.Logger:
    """Set up logging with a console handler and an optional rotating file handler.

    The file handler is only attached when WEATHERAURA_LOG_DIR is set.

    Args:
        name: Logger name (usually __name__)
        level: Log level string (DEBUG, INFO, WARNING, ERROR). Defaults to
            WEATHERAURA_LOG_LEVEL, then INFO.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers if called multiple times
    if logger.handlers:
        return logger

    level = level or os.environ.get("WEATHERAURA_LOG_LEVEL", "INFO")
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Format: timestamp | level | module | message
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir = os.environ.get("WEATHERAURA_LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "weatheraura.log"),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

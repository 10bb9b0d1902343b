"""Logging configuration for FarmRisk."""

import logging
import os
from pathlib import Path

LOG_FILE = Path(os.environ.get("FARMRISK_LOG_FILE", "farmrisk.log"))


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger for the given module name."""
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        file_handler = logging.FileHandler(LOG_FILE, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

        # Keep assessment logs out of the console and the uvicorn access log
        logger.propagate = False

    return logger

"""Centralized logging configuration."""

import os
import sys

from loguru import logger as loguru_logger

log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}:{function}:{line}</>",
        "{message}",
    )
)

loguru_logger.remove()
logger = loguru_logger


def configure(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, format=log_format, level=level)


configure(os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO")

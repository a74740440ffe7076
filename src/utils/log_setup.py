"""
Logging configuration for the summarizer process.
"""

import sys
from typing import Optional

from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Route loguru output to stderr at ``level`` and optionally to a rotating file."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="30 days",
            level=level.upper()
        )

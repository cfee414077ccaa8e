"""
Logging utilities
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


def setup_logger(log_dir: Optional[Union[str, Path]] = None, level: str = "INFO"):
    """
    Setup logger with console output and an optional rotating file

    Args:
        log_dir: Directory to save log files, None for console only
        level: Logging level

    Returns:
        The configured loguru logger
    """
    # Remove default handler
    logger.remove()

    # Console handler with colors
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        level=level,
        colorize=True
    )

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "autopath_{time:YYYY-MM-DD}.log",
            rotation="00:00",  # Rotate at midnight
            retention="7 days",  # Keep logs for 7 days
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
        )

    return logger

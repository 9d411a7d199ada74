import os
import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Configures Loguru sinks for the CLI.
    """
    # Remove default handler
    logger.remove()

    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        logger.add(log_file, rotation="10 MB", retention="1 week", level="DEBUG")

    logger.debug("Logging initialized at {}", level.upper())

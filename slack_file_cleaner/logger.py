"""
Logging setup. Use this as 'from slack_file_cleaner.logger import log'
"""

import sys

from loguru import logger as log

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logs(level: str = "INFO") -> None:
    """
    Replace loguru's default sink with a single stderr sink at the given
    level. Safe to call more than once.
    """
    log.remove()
    log.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    log.debug("Logging set up at level {}", level.upper())

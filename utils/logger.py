"""
utils/logger.py
Simple logging wrapper for ReachProbe
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (usually "reachprobe.<module>")
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    # Format: [LEVEL] message
    formatter = logging.Formatter(
        '%(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def set_level(level: int) -> None:
    """Change the level of every ReachProbe logger created so far."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        if name == "reachprobe" or name.startswith("reachprobe."):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)


# Default logger instance
log = get_logger("reachprobe")


__all__ = ["get_logger", "set_level", "log"]

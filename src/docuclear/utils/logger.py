"""
DocuClear - Logger Module

This module sets up logging for the application.
"""

import logging

from docuclear.config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


def setup_logger(
    log_level: int | None = None,
    log_format: str | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """Set up and configure the application logger

    Args:
        log_level: Logging level to use (default: LOG_LEVEL from config)
        log_format: Logging format string (default: LOG_FORMAT from config)
        logger_name: Name for the logger (default: LOGGER_NAME from config)

    Returns:
        A configured Logger instance
    """
    logging.basicConfig(
        level=log_level if log_level is not None else LOG_LEVEL,
        format=log_format or LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    configured = logging.getLogger(logger_name or LOGGER_NAME)
    if log_level is not None:
        configured.setLevel(log_level)
    return configured


logger = logging.getLogger(LOGGER_NAME)

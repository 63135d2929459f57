"""Logging utilities for novelapy modules."""

import logging

PACKAGE_LOGGER = 'novelapy'


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger in the novelapy hierarchy.

    Short names like 'auth' are placed under the package logger, so
    setup_logging() and the application's own configuration reach every
    module. Until the root logger has handlers, loggers without a level
    of their own are held at WARNING.

    Args:
        name: Logger name, full ('novelapy.auth') or short ('auth')

    Returns:
        Logger instance
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"
    logger = logging.getLogger(name)

    if not logging.getLogger().handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)

    return logger


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask a token or key for log output, keeping the last few characters."""
    if not value:
        return '<empty>'
    if len(value) <= visible:
        return '*' * len(value)
    return '*' * 8 + value[-visible:]

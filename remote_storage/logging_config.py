"""
Logging for the remote storage adapter.

A single stdout handler is attached to the "remote_storage" package logger;
each module logs through its own child logger, so records carry the module
name (e.g. "remote_storage.storage.s3") and still reach that one handler.
"""
import logging
import sys

from remote_storage.config import settings

PACKAGE_LOGGER = "remote_storage"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_package_logger() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers:
        return package_logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.LOG_LEVEL)
    return package_logger


def setup_logging(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Return the logger for ``name``, configuring the package logger on first use.

    Args:
        name: Dotted module name, normally ``__name__`` of the caller

    Returns:
        logging.Logger: The package logger or one of its children
    """
    package_logger = _configure_package_logger()
    if name == PACKAGE_LOGGER:
        return package_logger
    return logging.getLogger(name)

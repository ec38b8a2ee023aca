"""
Logging setup for applications that embed item_sprites.

The package itself only creates module loggers; handlers are attached here,
on demand, to the ``item_sprites`` namespace.
"""
from __future__ import annotations

import logging
import os
import sys

PACKAGE_LOGGER = "item_sprites"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: int = logging.INFO, log_file: str | os.PathLike | None = None) -> logging.Logger:
    """Route package log records to stdout and, optionally, to ``log_file``.

    Calling it again replaces the handlers it installed earlier, so the level
    or the target file can be changed at runtime.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    logger.addHandler(_handler(logging.StreamHandler(sys.stdout), level, formatter))
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        logger.addHandler(_handler(file_handler, level, formatter))

    logger.debug("logging to stdout%s", f" and {os.fspath(log_file)}" if log_file else "")
    return logger

# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Logging configuration for lintgate.

This module provides centralized logging configuration with console output
and optional rotating file output.

Functions
---------
setup_logging : Configure application logging
get_logger : Get a module logger

Examples
--------
>>> setup_logging(log_level="DEBUG")
"""
from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'lintgate'


class ColoredFormatter(logging.Formatter):
    """
    Custom formatter that adds color to console output.

    Colors are applied based on log level to improve readability.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with color codes."""
        if hasattr(sys.stderr, 'isatty') and sys.stderr.isatty():
            levelname = record.levelname
            if levelname in self.COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    console_output: bool = True,
    file_output: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5
) -> logging.Logger:
    """
    Configure logging for the application.

    The console handler writes to stderr so that the run report printed on
    stdout can be piped without log noise.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of the log file. If None, uses 'logs/lintgate.log'
        console_output: Whether to output logs to console
        file_output: Whether to output logs to file
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if file_output else level)

    # Remove existing handlers
    logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter('%(levelname)s: %(message)s'))
        logger.addHandler(console_handler)

    if file_output:
        log_path = Path(log_file or 'logs/lintgate.log')
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Module names outside the ``lintgate`` namespace are nested under it so
    that every logger shares the handlers installed by ``setup_logging``.

    Args:
        name: Name of the logger. Use __name__ from calling module.

    Returns:
        Logger instance
    """
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + '.'):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)

#!/usr/bin/env python3
"""
Logging configuration for template-inventory.

Provides structured logging with appropriate levels for CLI and library usage.
"""

import logging
import sys
from typing import Any

__version__ = "0.1.0"
__author__ = "John Ayers"

AWS_SDK_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "logger",
        "description": "Logging configuration",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


def setup_logger(name: str = "template_inventory", verbose: bool = False) -> logging.Logger:
    """Configure and return a logger instance.

    The AWS SDK loggers are held at WARNING unless verbose, so request
    tracing from botocore only shows up with -v.

    Args:
        name: Logger name
        verbose: If True, set level to DEBUG; otherwise INFO

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

        # Console handler on stderr; stdout carries --print output
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG if verbose else logging.INFO)

        # Format: timestamp - name - level - message
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)

    set_sdk_log_level(logging.DEBUG if verbose else logging.WARNING)

    return logger


def set_sdk_log_level(level: int) -> None:
    """Set the level of the boto3/botocore loggers.

    Args:
        level: Logging level applied to every SDK logger
    """
    for sdk_logger in AWS_SDK_LOGGERS:
        logging.getLogger(sdk_logger).setLevel(level)


def log_operation(
    logger: logging.Logger,
    operation: str,
    details: dict[str, Any] | None = None,
    level: int = logging.INFO,
) -> None:
    """Log an operation with structured details.

    Args:
        logger: Logger instance
        operation: Operation description
        details: Optional dictionary of details
        level: Logging level
    """
    message = f"{operation}"
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        message = f"{message} ({detail_str})"

    logger.log(level, message)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")

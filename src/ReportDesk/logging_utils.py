# ============================================================================
# ReportDesk - Logging Utilities
#
# Purpose: Centralized logging configuration and utilities
# Inputs: Log level, format string
# Outputs: Configured logger instances
# Dependencies: logging (stdlib)
# Usage: logger = get_logger(__name__)
#
# Changelog:
#   2026-09-02: Initial logging setup
#   2026-09-24: setup_logging accepts a LoggingConfig section directly
# ============================================================================

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ReportDesk.config import LoggingConfig

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO", format_string: Optional[str] = None) -> None:
    """
    Configure logging for the entire package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_string: Optional custom format string
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    if format_string is None:
        format_string = DEFAULT_FORMAT

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    _LOGGING_CONFIGURED = True


def setup_logging_from_config(logging_config: "LoggingConfig") -> None:
    """Configure logging from the ``logging`` section of a Config."""
    setup_logging(level=logging_config.level, format_string=logging_config.format)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)

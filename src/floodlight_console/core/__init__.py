"""Core utilities for the Floodlight console"""

from .decorators import backend_errors, requires_no_arguments
from .renderer import TableRenderer, format_timestamp
from .logging import SessionAdapter, setup_logging, get_logger, logger

__all__ = [
    "backend_errors",
    "requires_no_arguments",
    "TableRenderer",
    "format_timestamp",
    "setup_logging",
    "SessionAdapter",
    "get_logger",
    "logger",
]

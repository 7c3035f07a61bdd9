"""Logging configuration for the Floodlight console."""

import logging
import sys
from typing import Optional

# Package logger
logger = logging.getLogger("floodlight_console")

# Libraries that log every SSH packet or HTTP request at INFO/DEBUG
NOISY_LIBRARIES = ("paramiko", "httpx", "httpcore")

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(threadName)s]: %(message)s"


def setup_logging(
    debug: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Configure logging for the console process.

    Operator-facing output on stderr is limited to warnings unless debug is
    set; the optional log file always receives everything, tagged with the
    thread name so interleaved sessions can be told apart.

    Args:
        debug: Enable debug level logging
        log_file: Optional file path for log output

    Returns:
        Configured package logger
    """
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.handlers.clear()

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(logging.DEBUG if debug else logging.WARNING)
    stderr.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(stderr)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    for name in NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger for a component ('session', 'server', 'registry', ...)."""
    return logger.getChild(name)


class SessionAdapter(logging.LoggerAdapter):
    """Prefixes every record with the session id and user."""

    def process(self, msg, kwargs):
        return f"[session {self.extra['session']} {self.extra['user']}] {msg}", kwargs

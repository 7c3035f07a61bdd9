"""Exception hierarchy for the console."""

from typing import Optional


class ConsoleError(Exception):
    """Base class for all console errors."""


class DuplicatePathError(ConsoleError):
    """A command is already registered at this path."""

    def __init__(self, path: tuple[str, ...]):
        self.path = path
        super().__init__(f"Command already registered: {' '.join(path)}")


class StartupError(ConsoleError):
    """The console cannot start (port, host key, configuration)."""


class ConfigError(StartupError):
    """Invalid configuration file or value."""


class BackendError(ConsoleError):
    """A backend query failed or returned a malformed payload.

    Attributes:
        payload: The raw response body, if one was received
    """

    def __init__(self, message: str, payload: Optional[str] = None):
        self.payload = payload
        super().__init__(message)


class SessionExit(ConsoleError):
    """Raised by the exit command to end the current session."""

"""Decorators for command execution."""

from functools import wraps
from typing import Callable, Any

from ..exceptions import BackendError
from .logging import get_logger

log = get_logger("commands")

# Raw payloads are logged in full but truncated in the user-visible line
PAYLOAD_PREVIEW = 120


def backend_errors(func: Callable) -> Callable:
    """Turn a BackendError raised by a command into a single error line.

    Usage:
        @backend_errors
        def execute(self, console, arguments):
            ...
    """

    @wraps(func)
    def wrapper(self, *args, **kwargs) -> Any:
        try:
            return func(self, *args, **kwargs)
        except BackendError as e:
            name = getattr(self, "name", type(self).__name__)
            if e.payload is not None:
                log.warning("%s: %s; payload=%r", name, e, e.payload)
                preview = e.payload.strip().replace("\n", " ")
                if len(preview) > PAYLOAD_PREVIEW:
                    preview = preview[:PAYLOAD_PREVIEW] + "..."
                return f"Error: {e} (payload: {preview})"
            log.warning("%s: %s", name, e)
            return f"Error: {e}"

    return wrapper


def requires_no_arguments(func: Callable) -> Callable:
    """Reject any argument string for commands that take none."""

    @wraps(func)
    def wrapper(self, console, arguments: str = "", *args, **kwargs) -> Any:
        if arguments and arguments.strip():
            return f"Error: '{self.name}' takes no arguments"
        return func(self, console, arguments, *args, **kwargs)

    return wrapper

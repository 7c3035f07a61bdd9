"""Session, console and SSH transport for the Floodlight console."""

from .console import Console, StreamConsole, ChannelConsole
from .line_editor import History, LineEditor
from .session import Session, SessionState
from .factory import ShellFactory
from .server import ConsoleServer, load_host_key

__all__ = [
    "Console",
    "StreamConsole",
    "ChannelConsole",
    "History",
    "LineEditor",
    "Session",
    "SessionState",
    "ShellFactory",
    "ConsoleServer",
    "load_host_key",
]

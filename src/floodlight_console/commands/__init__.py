"""Command system for the Floodlight console.

Each command is a class that inherits from Command and implements:
- command_string: whitespace separated command path (e.g., "show host")
- arguments / help_text: optional usage and description
- execute(console, arguments): run the command and return its output
"""

from ..backend import DeviceInventory, SwitchClient
from .base import Command, split_path
from .registry import CommandRegistry
from .resolver import (
    Ambiguous,
    NotFound,
    ResolutionResult,
    ResolvedCommand,
    complete,
    resolve,
)
from .handlers import (
    ExitCommand,
    HelpCommand,
    ShowCommand,
    ShowHostCommand,
    ShowSwitchCommand,
)


def build_registry(switches: SwitchClient, devices: DeviceInventory) -> CommandRegistry:
    """Registry holding the default command set.

    Raises:
        DuplicatePathError: if two default commands share a path
    """
    registry = CommandRegistry()
    for command in (
        ExitCommand("exit"),
        ExitCommand("quit"),
        HelpCommand(registry),
        ShowCommand(registry),
        ShowSwitchCommand(switches),
        ShowHostCommand(devices),
    ):
        registry.register(command)
    return registry


__all__ = [
    "Command",
    "CommandRegistry",
    "split_path",
    "resolve",
    "complete",
    "ResolvedCommand",
    "Ambiguous",
    "NotFound",
    "ResolutionResult",
    "build_registry",
]

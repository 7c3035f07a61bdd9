"""Concrete console commands."""

from .root import ExitCommand, HelpCommand
from .show import ShowCommand
from .switch import ShowSwitchCommand
from .host import ShowHostCommand

__all__ = [
    "ExitCommand",
    "HelpCommand",
    "ShowCommand",
    "ShowSwitchCommand",
    "ShowHostCommand",
]

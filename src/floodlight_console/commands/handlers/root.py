"""Root-level commands: exit and help."""

from ...core import requires_no_arguments
from ...exceptions import SessionExit
from ..base import Command
from ..registry import CommandRegistry


class ExitCommand(Command):
    """Ends the session. Registered as both 'exit' and 'quit'."""

    help_text = "Close the console session"

    def __init__(self, command_string: str = "exit"):
        self.command_string = command_string

    def execute(self, console, arguments):
        raise SessionExit()


class HelpCommand(Command):
    command_string = "help"
    help_text = "List all available commands"

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    @requires_no_arguments
    def execute(self, console, arguments):
        commands = list(self.registry.commands())
        width = max((len(c.usage) for c in commands), default=0)
        lines = ["Available commands:"]
        for command in commands:
            text = command.help_text or ""
            lines.append(f"  {command.usage.ljust(width)}  {text}".rstrip())
        return "\n".join(lines)

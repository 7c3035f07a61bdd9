"""The bare 'show' command: lists what can be shown."""

from ...core import requires_no_arguments
from ..base import Command
from ..registry import CommandRegistry


class ShowCommand(Command):
    command_string = "show"
    help_text = "List the available show commands"

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    # Only reachable with arguments when no "show" sub-commands are registered
    @requires_no_arguments
    def execute(self, console, arguments):
        subcommands = [
            c for c in self.registry.commands() if c.path[:1] == ("show",) and c is not self
        ]
        if not subcommands:
            return "Nothing to show"
        width = max(len(c.usage) for c in subcommands)
        lines = ["Usage:"]
        for c in subcommands:
            lines.append(f"  {c.usage.ljust(width)}  {c.help_text or ''}".rstrip())
        return "\n".join(lines)

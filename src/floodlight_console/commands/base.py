"""Command contract implemented by every console command."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..shell.console import Console


def split_path(command_string: str) -> tuple[str, ...]:
    """'Show  Host' -> ('show', 'host')"""
    return tuple(token.lower() for token in command_string.split())


class Command(ABC):
    """Base class for all commands.

    Subclasses set ``command_string`` (whitespace separated tokens, matched
    case-insensitively) and optionally ``arguments`` (usage text such as
    ``"[SWITCH]"``) and ``help_text``. Instances are never mutated after
    registration and may run concurrently in several sessions.
    """

    command_string: str = ""
    arguments: Optional[str] = None
    help_text: Optional[str] = None

    @property
    def path(self) -> tuple[str, ...]:
        return split_path(self.command_string)

    @property
    def name(self) -> str:
        return " ".join(self.path)

    @property
    def usage(self) -> str:
        """Command name followed by its argument usage, if any."""
        return f"{self.name} {self.arguments}" if self.arguments else self.name

    @abstractmethod
    def execute(self, console: "Console", arguments: str) -> str:
        """Run the command.

        Args:
            console: Console of the invoking session
            arguments: Raw text following the command tokens, stripped

        Returns:
            Text to write back to the session (may be empty)
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

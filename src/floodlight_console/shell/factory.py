"""Bridges a transport connection to a new Session."""

from typing import Optional

import paramiko

from ..commands import CommandRegistry
from ..config import ConsoleConfig
from .console import ChannelConsole, Console
from .session import Session


class ShellFactory:
    """Creates one Session per connection, all sharing the same registry."""

    def __init__(self, registry: CommandRegistry, config: Optional[ConsoleConfig] = None):
        self.registry = registry
        self.config = config or ConsoleConfig()

    def create_session(self, console: Console, user: str) -> Session:
        return Session(
            self.registry,
            console,
            user,
            prompt=self.config.prompt,
            history_size=self.config.history_size,
        )

    def handle_channel(self, channel: paramiko.Channel, user: str) -> Session:
        """Run a session on an authenticated SSH channel until it ends."""
        session = self.create_session(ChannelConsole(channel), user)
        session.run()
        return session

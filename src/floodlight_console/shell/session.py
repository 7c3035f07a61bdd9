"""Session: the read-execute-print loop of one authenticated connection."""

import itertools
import threading
from enum import Enum
from typing import Optional

from thefuzz import fuzz, process

from ..commands import (
    Ambiguous,
    CommandRegistry,
    NotFound,
    ResolvedCommand,
    complete,
    resolve,
)
from ..core.logging import SessionAdapter, get_logger
from ..exceptions import SessionExit
from .console import Console
from .line_editor import History

log = get_logger("session")

DEFAULT_PROMPT = "floodlight> "
SUGGESTION_CUTOFF = 60

_ids = itertools.count(1)


class SessionState(Enum):
    CONNECTED = "connected"
    EXECUTING = "executing"
    CLOSING = "closing"
    CLOSED = "closed"


class Session:
    """State and loop for one connected user.

    Sessions share nothing but the registry, which they only read. Commands
    run synchronously in the session's own thread, so a slow command holds
    up only this session.

    Args:
        registry: Commands available to the user
        console: Console bound to the user's connection
        user: Authenticated identity, used for logging and the banner
        prompt: Prompt written before each line
        history_size: Maximum number of remembered input lines
    """

    def __init__(
        self,
        registry: CommandRegistry,
        console: Console,
        user: str,
        prompt: str = DEFAULT_PROMPT,
        history_size: int = 100,
    ):
        self.id = next(_ids)
        self.registry = registry
        self.console = console
        self.user = user
        self.prompt = prompt
        self.history = History(history_size)
        self._state = SessionState.CONNECTED
        self._state_lock = threading.Lock()
        self.log = SessionAdapter(log, {"session": self.id, "user": user})

    def __repr__(self) -> str:
        return f"<Session {self.id} user={self.user!r} state={self._state.value}>"

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def banner(self) -> str:
        return (
            f"Welcome to the Floodlight console, {self.user}. "
            "Type 'help' for a list of commands."
        )

    def run(self) -> None:
        """Serve the user until exit, EOF or disconnect."""
        self.log.info("Session opened")
        try:
            self.console.write_line(self.banner)
            while self._state is SessionState.CONNECTED:
                line = self.console.read_line(
                    self.prompt, history=self.history, completer=self.complete
                )
                if line is None:
                    self.log.debug("End of input")
                    break
                self.history.add(line)
                self.process(line)
        finally:
            self.close()

    def process(self, line: str) -> None:
        """Resolve and run one input line, writing any output."""
        if not line.strip():
            return
        result = resolve(self.registry, line)
        if isinstance(result, ResolvedCommand):
            output = self.execute(result)
        elif isinstance(result, Ambiguous):
            output = self.render_ambiguous(result)
        else:
            output = self.render_not_found(result)

        if self.console.closed:
            # Connection went away while the command ran
            self.log.debug("Discarding output of '%s'", line)
            self._transition(SessionState.CLOSING)
            return
        if output:
            self.console.write_line(output)

    def execute(self, result: ResolvedCommand) -> Optional[str]:
        command = result.command
        self.log.debug("Executing '%s' args=%r", command.name, result.arguments)
        self._transition(SessionState.EXECUTING)
        try:
            return command.execute(self.console, result.arguments)
        except SessionExit:
            self._transition(SessionState.CLOSING)
            return None
        except Exception as e:
            self.log.exception("Command '%s' failed", command.name)
            return f"Error: {e}"
        finally:
            with self._state_lock:
                if self._state is SessionState.EXECUTING:
                    self._state = SessionState.CONNECTED

    def render_ambiguous(self, result: Ambiguous) -> str:
        lines = [f'% Ambiguous command: "{result.matched_prefix}"']
        lines.extend(f"  {candidate}" for candidate in result.candidates)
        return "\n".join(lines)

    def render_not_found(self, result: NotFound) -> str:
        message = f"% Unrecognized command: {result.input_line}"
        first = result.input_line.split()[0].lower() if result.input_line else ""
        best = None
        if first:
            best = process.extractOne(
                first,
                self.registry.first_tokens(),
                scorer=fuzz.ratio,
                score_cutoff=SUGGESTION_CUTOFF,
            )
        if best:
            message += f"\nDid you mean: {best[0]}?"
        return message

    def complete(self, partial_line: str) -> list[str]:
        return complete(self.registry, partial_line)

    def _transition(self, state: SessionState) -> None:
        with self._state_lock:
            if self._state is SessionState.CLOSED:
                return
            self._state = state

    def close(self) -> None:
        """Move to CLOSED and release the console. Safe to call twice."""
        with self._state_lock:
            if self._state is SessionState.CLOSED:
                return
            self._state = SessionState.CLOSING
        self.console.close()
        with self._state_lock:
            self._state = SessionState.CLOSED
        self.log.info("Session closed")

"""Console abstraction: how commands and sessions talk to the user.

A Console is implemented once per transport and handed to every command
invocation, so commands never touch the transport directly.
"""

import codecs
import threading
from abc import ABC, abstractmethod
from typing import Optional, TextIO

import paramiko

from ..core.logging import get_logger
from .line_editor import Completer, History, LineEditor

log = get_logger("console")


class Console(ABC):
    """Read/write capability of one session.

    Once closed, writes are silently dropped and reads return None.
    """

    def __init__(self):
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        self._closed.set()

    @abstractmethod
    def write(self, text: str) -> None:
        """Write text as-is."""

    def write_line(self, text: str = "") -> None:
        self.write(text + "\n")

    @abstractmethod
    def read_line(
        self,
        prompt: str = "",
        history: Optional[History] = None,
        completer: Optional[Completer] = None,
    ) -> Optional[str]:
        """Show prompt and read one line; None on EOF or disconnect."""


class StreamConsole(Console):
    """Console over text streams (a local terminal, or StringIO in tests).

    The terminal does its own line editing, so history and completion are
    not applied here.
    """

    def __init__(self, stdin: TextIO, stdout: TextIO):
        super().__init__()
        self.stdin = stdin
        self.stdout = stdout

    def write(self, text: str) -> None:
        if self.closed:
            return
        try:
            self.stdout.write(text)
            self.stdout.flush()
        except (OSError, ValueError) as e:
            log.debug("Output stream failed, closing console: %s", e)
            self.close()

    def read_line(self, prompt="", history=None, completer=None):
        if self.closed:
            return None
        if prompt:
            self.write(prompt)
        try:
            line = self.stdin.readline()
        except (OSError, ValueError) as e:
            log.debug("Input stream failed, closing console: %s", e)
            self.close()
            return None
        if not line:
            return None
        return line.rstrip("\r\n")


class ChannelConsole(Console):
    """Console bound to an SSH session channel.

    Performs line editing server side (echo, backspace, history, TAB
    completion) since the remote terminal is in raw mode.
    """

    def __init__(self, channel: paramiko.Channel, encoding: str = "utf-8"):
        super().__init__()
        self.channel = channel
        self.encoding = encoding
        # Multi-byte characters may be split across recv() chunks
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""
        self._skip_lf = False

    def write(self, text: str) -> None:
        if self.closed:
            return
        data = text.replace("\r\n", "\n").replace("\n", "\r\n")
        try:
            self.channel.sendall(data.encode(self.encoding, errors="replace"))
        except (OSError, EOFError, paramiko.SSHException) as e:
            log.debug("Channel write failed, closing console: %s", e)
            self.close()

    def _next_char(self) -> Optional[str]:
        while not self._pending:
            try:
                data = self.channel.recv(1024)
            except (OSError, EOFError, paramiko.SSHException) as e:
                log.debug("Channel read failed: %s", e)
                return None
            if not data:
                return None
            self._pending = self._decoder.decode(data)
        ch, self._pending = self._pending[0], self._pending[1:]
        return ch

    def read_line(self, prompt="", history=None, completer=None):
        if self.closed:
            return None
        editor = LineEditor(prompt, history, completer)
        self.write(prompt)
        while not editor.done:
            ch = self._next_char()
            if ch is None:
                self.close()
                return None
            if self._skip_lf:
                self._skip_lf = False
                if ch == "\n":
                    continue
            echo = editor.feed(ch)
            if echo and not self.closed:
                # Echo is already terminal-formatted
                try:
                    self.channel.sendall(echo.encode(self.encoding, errors="replace"))
                except (OSError, EOFError, paramiko.SSHException):
                    self.close()
                    return None
            if editor.line is not None and ch == "\r":
                self._skip_lf = True
        if editor.eof:
            return None
        return editor.line

    def close(self) -> None:
        if self.closed:
            return
        super().close()
        try:
            self.channel.close()
        except (OSError, EOFError, paramiko.SSHException):
            pass

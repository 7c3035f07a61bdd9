"""Per-session line editing and command history."""

from collections import deque
from typing import Callable, Optional

Completer = Callable[[str], list[str]]

CTRL_C = "\x03"
CTRL_D = "\x04"
BACKSPACE = ("\x08", "\x7f")
ESC = "\x1b"
CLEAR_TO_EOL = "\x1b[K"
# Bytes between "ESC [" and the final byte of a control sequence
CSI_PARAMETERS = frozenset("0123456789;:<=>?")


class History:
    """Bounded list of previously entered lines, oldest first."""

    def __init__(self, size: int = 100):
        self._lines: deque[str] = deque(maxlen=size)

    def add(self, line: str) -> None:
        # Skip blanks and immediate repeats
        line = line.strip()
        if not line or self._lines.maxlen == 0:
            return
        if self._lines and self._lines[-1] == line:
            return
        self._lines.append(line)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def entries(self) -> list[str]:
        return list(self._lines)


def common_prefix(words: list[str]) -> str:
    if not words:
        return ""
    first, last = min(words), max(words)
    i = 0
    while i < len(first) and i < len(last) and first[i] == last[i]:
        i += 1
    return first[:i]


class LineEditor:
    """Turns a raw terminal character stream into one input line.

    Feed characters one at a time; each call returns the text to echo back
    to the terminal. The editor is finished when ``line`` is set (Enter)
    or ``eof`` is True (Ctrl-D on an empty line).
    """

    def __init__(
        self,
        prompt: str = "",
        history: Optional[History] = None,
        completer: Optional[Completer] = None,
    ):
        self.prompt = prompt
        self.history = history
        self.completer = completer
        self.buffer: list[str] = []
        self.line: Optional[str] = None
        self.eof = False
        self._escape = ""
        self._hist_idx: Optional[int] = None
        self._saved = ""

    @property
    def text(self) -> str:
        return "".join(self.buffer)

    @property
    def done(self) -> bool:
        return self.line is not None or self.eof

    def feed(self, ch: str) -> str:
        if self.done:
            return ""
        if self._escape:
            return self._feed_escape(ch)
        if ch in ("\r", "\n"):
            self.line = self.text
            return "\r\n"
        if ch in BACKSPACE:
            if self.buffer:
                self.buffer.pop()
                return "\b \b"
            return ""
        if ch == CTRL_C:
            self.buffer.clear()
            self._hist_idx = None
            return "^C\r\n" + self.prompt
        if ch == CTRL_D:
            if not self.buffer:
                self.eof = True
            return ""
        if ch == "\t":
            return self._complete()
        if ch == ESC:
            self._escape = ESC
            return ""
        if ch.isprintable():
            self.buffer.append(ch)
            return ch
        return ""

    def _feed_escape(self, ch: str) -> str:
        if self._escape == ESC:
            self._escape = ESC + ch if ch in ("[", "O") else ""
            return ""
        if self._escape.startswith(ESC + "[") and ch in CSI_PARAMETERS:
            self._escape += ch
            return ""
        sequence, self._escape = self._escape + ch, ""
        if sequence in (ESC + "[A", ESC + "OA"):
            return self._history_up()
        if sequence in (ESC + "[B", ESC + "OB"):
            return self._history_down()
        # Delete, paging, cursor movement and modified keys are not supported
        return ""

    def _redraw(self, text: str) -> str:
        self.buffer[:] = list(text)
        return "\r" + self.prompt + CLEAR_TO_EOL + text

    def _history_up(self) -> str:
        if not self.history:
            return ""
        if self._hist_idx is None:
            self._saved = self.text
            self._hist_idx = len(self.history) - 1
        else:
            self._hist_idx = max(0, self._hist_idx - 1)
        return self._redraw(self.history[self._hist_idx])

    def _history_down(self) -> str:
        if self._hist_idx is None or not self.history:
            return ""
        self._hist_idx += 1
        if self._hist_idx >= len(self.history):
            self._hist_idx = None
            return self._redraw(self._saved)
        return self._redraw(self.history[self._hist_idx])

    def _complete(self) -> str:
        if self.completer is None:
            return ""
        current = self.text
        candidates = self.completer(current)
        if not candidates:
            return ""
        typed = "" if not current or current[-1].isspace() else current.split()[-1]
        if len(candidates) == 1:
            addition = candidates[0][len(typed):] + " "
        else:
            addition = common_prefix(candidates)[len(typed):]
        if addition:
            self.buffer.extend(addition)
            return addition
        return "\r\n" + "  ".join(candidates) + "\r\n" + self.prompt + current

"""Resolve raw input lines against the command registry."""

import re
from dataclasses import dataclass
from typing import Union

from .base import Command
from .registry import CommandRegistry

TOKEN = re.compile(r"\S+")


@dataclass(frozen=True)
class ResolvedCommand:
    """A single command matched; arguments is the untouched trailing text."""

    command: Command
    arguments: str = ""


@dataclass(frozen=True)
class Ambiguous:
    """Input stopped at a point where several next tokens are possible."""

    candidates: tuple[str, ...]
    matched_prefix: str


@dataclass(frozen=True)
class NotFound:
    """No registered command matches the input."""

    input_line: str


ResolutionResult = Union[ResolvedCommand, Ambiguous, NotFound]


def resolve(registry: CommandRegistry, raw_line: str) -> ResolutionResult:
    """Map a raw input line to a resolution result.

    Tokens are consumed only as deep as the command tree goes; whatever
    follows the last consumed token is handed to the command verbatim
    (outer whitespace stripped, inner spacing preserved).

    Args:
        registry: Registry to resolve against
        raw_line: One line of user input

    Returns:
        ResolvedCommand, Ambiguous or NotFound
    """
    line = raw_line.strip()
    spans = list(TOKEN.finditer(line))
    tokens = [m.group() for m in spans]

    node, consumed, candidates = registry.lookup(tokens)
    path = [m.group() for m in spans[:consumed]]

    if candidates:
        return Ambiguous(candidates, " ".join(path + [tokens[consumed]]))

    if consumed == 0:
        return NotFound(line)

    exhausted = consumed == len(tokens)
    # Leftover text is an argument only below a leaf; on an inner node an
    # unmatched token is an unknown sub-command
    if node.command is not None and (exhausted or not node.children):
        rest = line[spans[consumed - 1].end():].strip()
        return ResolvedCommand(node.command, rest)

    if exhausted:
        return Ambiguous(tuple(sorted(node.children)), " ".join(path))
    return NotFound(line)


def complete(registry: CommandRegistry, partial_line: str) -> list[str]:
    """Candidate tokens for the word being typed at the end of partial_line.

    A trailing space means a new word is starting, so every child of the
    node reached so far is a candidate.
    """
    tokens = partial_line.split()
    if partial_line and not partial_line[-1].isspace() and tokens:
        prefix = tokens.pop().lower()
    else:
        prefix = ""

    node, consumed, _ = registry.lookup(tokens)
    if consumed != len(tokens):
        return []
    return sorted(t for t in node.children if t.startswith(prefix))

"""Command registry organized as a prefix tree of command tokens."""

import threading
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..core.logging import get_logger
from ..exceptions import DuplicatePathError
from .base import Command

log = get_logger("registry")


@dataclass
class Node:
    """One trie node: the token leading here, an optional command, children."""

    token: str = ""
    command: Optional[Command] = None
    children: dict[str, "Node"] = field(default_factory=dict)

    def copy(self) -> "Node":
        return Node(self.token, self.command, dict(self.children))


@dataclass(frozen=True)
class Step:
    """Outcome of matching one input token against a node's children."""

    node: Optional[Node] = None
    candidates: tuple[str, ...] = ()


class CommandRegistry:
    """Registry of all commands, keyed by lowercase token path.

    Writers (register/unregister) are serialized by a lock and publish a
    new root by path copying, so readers walk an immutable snapshot and
    never lock.
    """

    def __init__(self):
        self._root = Node()
        self._write_lock = threading.Lock()

    @property
    def root(self) -> Node:
        return self._root

    def register(self, command: Command) -> None:
        """Register a command at its path.

        Raises:
            DuplicatePathError: if a command is already bound to the path
            ValueError: if the command has an empty path
        """
        path = command.path
        if not path:
            raise ValueError(f"Command has an empty path: {command!r}")
        with self._write_lock:
            new_root = self._root.copy()
            node = new_root
            for token in path:
                child = node.children.get(token)
                child = child.copy() if child else Node(token)
                node.children[token] = child
                node = child
            if node.command is not None:
                raise DuplicatePathError(path)
            node.command = command
            self._root = new_root
        log.debug("Registered command '%s'", command.name)

    def unregister(self, path: tuple[str, ...]) -> Optional[Command]:
        """Remove and return the command at an exact path, if any."""
        path = tuple(t.lower() for t in path)
        with self._write_lock:
            nodes = [self._root.copy()]
            for token in path:
                child = nodes[-1].children.get(token)
                if child is None:
                    return None
                child = child.copy()
                nodes[-1].children[token] = child
                nodes.append(child)
            removed = nodes[-1].command
            if removed is None:
                return None
            nodes[-1].command = None
            # Prune branches left without commands
            for parent, child in zip(reversed(nodes[:-1]), reversed(nodes[1:])):
                if child.command is None and not child.children:
                    del parent.children[child.token]
            self._root = nodes[0]
        log.debug("Unregistered command '%s'", removed.name)
        return removed

    def get(self, path: tuple[str, ...]) -> Optional[Command]:
        """Exact-path lookup (no prefix matching)."""
        node = self._root
        for token in path:
            node = node.children.get(token.lower())
            if node is None:
                return None
        return node.command

    @staticmethod
    def match(node: Node, token: str) -> Step:
        """Match one token against a node's children.

        An exact token wins over prefix matches; otherwise a unique prefix
        match descends and several prefix matches are reported as
        candidates. No match returns an empty Step.
        """
        key = token.lower()
        if not key:
            return Step()
        exact = node.children.get(key)
        if exact is not None:
            return Step(node=exact)
        matches = sorted(t for t in node.children if t.startswith(key))
        if len(matches) == 1:
            return Step(node=node.children[matches[0]])
        return Step(candidates=tuple(matches))

    def lookup(self, tokens: list[str]) -> tuple[Node, int, tuple[str, ...]]:
        """Walk the trie along tokens.

        Returns:
            (last node reached, number of tokens consumed, ambiguous
            candidates at the token where the walk stopped, if any)
        """
        node = self._root
        consumed = 0
        for token in tokens:
            if not node.children:
                break
            step = self.match(node, token)
            if step.node is None:
                return node, consumed, step.candidates
            node = step.node
            consumed += 1
        return node, consumed, ()

    def commands(self) -> Iterator[Command]:
        """All registered commands in path order."""

        def walk(node: Node) -> Iterator[Command]:
            if node.command is not None:
                yield node.command
            for token in sorted(node.children):
                yield from walk(node.children[token])

        return walk(self._root)

    def first_tokens(self) -> list[str]:
        return sorted(self._root.children)

    def __len__(self) -> int:
        return sum(1 for _ in self.commands())

    def __contains__(self, command_string: str) -> bool:
        return self.get(tuple(command_string.split())) is not None

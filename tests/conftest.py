"""Shared pytest fixtures"""

import io

import pytest

from floodlight_console.commands import Command, CommandRegistry
from floodlight_console.commands.handlers import ExitCommand
from floodlight_console.shell import StreamConsole


class StubCommand(Command):
    """Command returning a fixed text and recording its calls."""

    def __init__(self, command_string, output=None, arguments=None, help_text=None):
        self.command_string = command_string
        self.output = command_string if output is None else output
        self.arguments = arguments
        self.help_text = help_text
        self.calls = []

    def execute(self, console, arguments):
        self.calls.append(arguments)
        return self.output


@pytest.fixture
def stub_command():
    return StubCommand


@pytest.fixture
def registry():
    """Registry with show, show switch, show host and exit."""
    reg = CommandRegistry()
    for command_string in ("show", "show switch", "show host"):
        reg.register(StubCommand(command_string))
    reg.register(ExitCommand())
    return reg


@pytest.fixture
def make_console():
    """Build a StreamConsole fed with the given input text."""

    def _make(text=""):
        return StreamConsole(io.StringIO(text), io.StringIO())

    return _make


@pytest.fixture
def sample_switch_json():
    return [
        {
            "dpid": "00:00:00:00:00:00:00:01",
            "connectedSince": 1380000000000,
            "inetAddress": "/10.0.0.11:51234",
        },
        {
            "dpid": "00:00:00:00:00:00:00:02",
            "connectedSince": 1380000060000,
            "inetAddress": "/10.0.0.12:40001",
        },
    ]


@pytest.fixture
def sample_device_json():
    return [
        {
            "entityClass": "DefaultEntityClass",
            "mac": ["00:00:00:00:00:0a"],
            "ipv4": ["10.0.0.1"],
            "vlan": ["-1"],
            "attachmentPoint": [
                {"switchDPID": "00:00:00:00:00:00:00:01", "port": 1, "errorStatus": None}
            ],
            "lastSeen": 1380000000000,
        },
        {
            "entityClass": "DefaultEntityClass",
            "mac": ["00:00:00:00:00:0B"],
            "ipv4": [],
            "vlan": ["10"],
            "attachmentPoint": [],
            "lastSeen": 1380000120000,
        },
    ]


class FakeChannel:
    """Stands in for a paramiko Channel."""

    def __init__(self, chunks=(), fail_send=False):
        self.chunks = list(chunks)
        self.sent = b""
        self.fail_send = fail_send
        self.closed = False

    def recv(self, n):
        return self.chunks.pop(0) if self.chunks else b""

    def sendall(self, data):
        if self.fail_send:
            raise OSError("connection reset")
        self.sent += data

    def close(self):
        self.closed = True


@pytest.fixture
def fake_channel():
    return FakeChannel

"""'show switch': switches connected to the controller, via the REST API."""

from typing import Optional

from ...backend import SwitchClient
from ...core import TableRenderer, backend_errors, format_timestamp
from ...models import SwitchModel
from ..base import Command

HEADER = [
    "Switch DPID",
    "Switch Alias",
    "Active",
    "Core Switch",
    "Last Connect Time",
    "IP Address",
    "Port",
    "Controller ID",
    "Max Packets",
    "Max Tables",
]


def switch_row(switch: SwitchModel) -> list[str]:
    # Alias, state and capacity columns are not exposed by the endpoint
    port = switch.port
    return [
        switch.dpid,
        "",
        "",
        "",
        format_timestamp(switch.connected_since),
        switch.ip_address,
        "" if port is None else str(port),
        "",
        "",
        "",
    ]


class ShowSwitchCommand(Command):
    command_string = "show switch"
    arguments = "[SWITCH]"
    help_text = "Show connected switches, or only the one with DPID SWITCH"

    def __init__(self, client: SwitchClient, renderer: Optional[TableRenderer] = None):
        self.client = client
        self.renderer = renderer or TableRenderer()

    @backend_errors
    def execute(self, console, arguments):
        switches = self.client.list_switches()
        dpid = arguments.strip().lower()
        if dpid and dpid != "all":
            switches = [s for s in switches if s.dpid.lower() == dpid]
        return self.renderer.render(HEADER, [switch_row(s) for s in switches])

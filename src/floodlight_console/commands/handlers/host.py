"""'show host': end hosts known to the device manager."""

from typing import Optional

from ...backend import DeviceInventory
from ...core import TableRenderer, backend_errors, format_timestamp
from ...models import DeviceModel
from ..base import Command

HEADER = [
    "MAC Address",
    "VLAN",
    "Vendor",
    "IP Address",
    "Switch/OF Port (Physical Port)",
    "Tag",
    "Last Seen",
]


def device_row(device: DeviceModel) -> list[str]:
    return [
        device.mac,
        "" if device.vlan is None else str(device.vlan),
        "unknown",
        device.primary_ipv4,
        ", ".join(str(ap) for ap in device.attachment_points),
        "",
        format_timestamp(device.last_seen),
    ]


def matches(device: DeviceModel, query: str) -> bool:
    """True if query is the device's MAC (any case) or one of its IPv4s."""
    return device.mac == query.lower() or query in device.ipv4


class ShowHostCommand(Command):
    command_string = "show host"
    arguments = "[MAC|IP]"
    help_text = "Show hosts attached to controlled switches"

    def __init__(
        self, inventory: DeviceInventory, renderer: Optional[TableRenderer] = None
    ):
        self.inventory = inventory
        self.renderer = renderer or TableRenderer()

    @backend_errors
    def execute(self, console, arguments):
        devices = self.inventory.get_all_devices()
        query = arguments.strip()
        if query:
            devices = [d for d in devices if matches(d, query)]
        return self.renderer.render(HEADER, [device_row(d) for d in devices])

"""Host/device record as tracked by the controller's device manager."""

from typing import Any, Optional

from pydantic import Field, field_validator

from .base import MAC_PATTERN, AttachmentPoint, InventoryRecord


class DeviceModel(InventoryRecord):
    """End host seen by the controller."""

    mac: str = Field(..., description="MAC address")
    vlan: Optional[int] = Field(None, description="VLAN id, None when untagged")
    ipv4: list[str] = Field(default_factory=list)
    attachment_points: list[AttachmentPoint] = Field(default_factory=list)
    last_seen: Optional[int] = Field(None, description="Epoch millis")

    @field_validator("mac")
    @classmethod
    def validate_mac(cls, v: str) -> str:
        if not MAC_PATTERN.match(v):
            raise ValueError(f"Invalid MAC address: {v}")
        return v.lower()

    @field_validator("vlan")
    @classmethod
    def validate_vlan(cls, v: Optional[int]) -> Optional[int]:
        # The device manager reports untagged hosts as VLAN -1
        if v is None or v < 0:
            return None
        if v > 4095:
            raise ValueError(f"VLAN out of range: {v}")
        return v

    @classmethod
    def from_rest(cls, entry: dict[str, Any]) -> "DeviceModel":
        """Build from one element of the /wm/device/ JSON array.

        List-valued fields (mac, vlan) carry the primary value first.
        """
        macs = entry.get("mac") or []
        vlans = entry.get("vlan") or []
        return cls(
            mac=macs[0] if macs else "",
            vlan=int(vlans[0]) if vlans else None,
            ipv4=list(entry.get("ipv4") or []),
            attachment_points=[
                AttachmentPoint(switch_dpid=ap["switchDPID"], port=ap["port"])
                for ap in entry.get("attachmentPoint") or []
            ],
            last_seen=entry.get("lastSeen"),
        )

    @property
    def primary_ipv4(self) -> str:
        return self.ipv4[0] if self.ipv4 else ""

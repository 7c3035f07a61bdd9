"""Switch record as served by the controller REST API."""

from typing import Optional

from pydantic import Field, field_validator

from .base import DPID_PATTERN, InventoryRecord


class SwitchModel(InventoryRecord):
    """Connected OpenFlow switch."""

    dpid: str = Field(..., description="Datapath ID, colon separated")
    connected_since: int = Field(
        ..., alias="connectedSince", description="Epoch millis of last connect"
    )
    inet_address: str = Field(
        ..., alias="inetAddress", description="Remote address as '/ip:port'"
    )

    @field_validator("dpid")
    @classmethod
    def validate_dpid(cls, v: str) -> str:
        if not DPID_PATTERN.match(v):
            raise ValueError(f"Invalid DPID: {v}")
        return v

    @field_validator("inet_address")
    @classmethod
    def validate_inet_address(cls, v: str) -> str:
        if not v.startswith("/") or ":" not in v:
            raise ValueError(f"inetAddress must look like '/ip:port': {v}")
        return v

    @property
    def ip_address(self) -> str:
        return self.inet_address[1:].rsplit(":", 1)[0]

    @property
    def port(self) -> Optional[int]:
        raw = self.inet_address.rsplit(":", 1)[1]
        return int(raw) if raw.isdigit() else None

"""Base Pydantic models for controller inventory records."""

import re

from pydantic import BaseModel, ConfigDict, field_validator

DPID_PATTERN = re.compile(r"^([0-9a-fA-F]{2}:){7}[0-9a-fA-F]{2}$")
MAC_PATTERN = re.compile(r"^([0-9a-fA-F]{2}:){5}[0-9a-fA-F]{2}$")


class InventoryRecord(BaseModel):
    """Base model for all records returned by the controller."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class AttachmentPoint(BaseModel):
    """Switch port a device is attached to."""

    switch_dpid: str
    port: int

    @field_validator("switch_dpid")
    @classmethod
    def validate_dpid(cls, v: str) -> str:
        if not DPID_PATTERN.match(v):
            raise ValueError(f"Invalid DPID: {v}")
        return v.lower()

    def __str__(self) -> str:
        return f"{self.switch_dpid}/{self.port}"

"""Pydantic models for controller inventory."""

from .base import InventoryRecord, AttachmentPoint
from .switch import SwitchModel
from .device import DeviceModel

__all__ = [
    "InventoryRecord",
    "AttachmentPoint",
    "SwitchModel",
    "DeviceModel",
]

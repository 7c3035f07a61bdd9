"""Backends queried by console commands."""

from .rest import (
    RestClient,
    SwitchClient,
    DeviceInventory,
    RestDeviceInventory,
    StaticDeviceInventory,
    SWITCHES_PATH,
    DEVICES_PATH,
)

__all__ = [
    "RestClient",
    "SwitchClient",
    "DeviceInventory",
    "RestDeviceInventory",
    "StaticDeviceInventory",
    "SWITCHES_PATH",
    "DEVICES_PATH",
]

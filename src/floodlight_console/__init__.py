"""Cisco-style SSH command console for the Floodlight controller."""

__version__ = "0.3.0"

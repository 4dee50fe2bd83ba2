"""Encoding, timestamps, leap-second conversion and validators for the fog-pack binary data format."""

__version__ = "0.1.0"
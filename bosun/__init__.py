"""Bosun - NMEA 0183 instrument-bus decoder and vessel-state service."""

__version__ = "0.1.0"

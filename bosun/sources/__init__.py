"""NMEA line sources for Bosun."""

from bosun.sources.base import NMEASource, SourceConfigError, SourceError, SourceInfo
from bosun.sources.config import (
    create_source,
    create_source_from_config,
    create_source_from_settings,
    load_config,
)

__all__ = [
    "NMEASource",
    "SourceConfigError",
    "SourceError",
    "SourceInfo",
    "create_source",
    "create_source_from_config",
    "create_source_from_settings",
    "load_config",
]

"""NMEA 0183 sentence processing for Bosun.

This module provides:
- Sentence framing and checksum validation
- Dispatch of sentences to per-type handlers
- The navigation state updated by those handlers
"""

from bosun.nmea.decoder import NMEADecoder, get_decoder, set_decoder
from bosun.nmea.errors import (
    ChecksumNotFound,
    InvalidChecksum,
    MalformedChecksum,
    MalformedTag,
    NMEAError,
    UnrecognizedEncoding,
)
from bosun.nmea.framing import Sentence, SentenceFormat, checksum, frame_sentence
from bosun.nmea.state import AISTarget, AISTargets, Coordinates, NavigationState

__all__ = [
    # Decoder
    "NMEADecoder",
    "get_decoder",
    "set_decoder",
    # Errors
    "ChecksumNotFound",
    "InvalidChecksum",
    "MalformedChecksum",
    "MalformedTag",
    "NMEAError",
    "UnrecognizedEncoding",
    # Framing
    "Sentence",
    "SentenceFormat",
    "checksum",
    "frame_sentence",
    # State
    "AISTarget",
    "AISTargets",
    "Coordinates",
    "NavigationState",
]

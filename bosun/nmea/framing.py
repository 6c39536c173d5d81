"""Sentence framing and checksum validation.

An NMEA 0183 sentence looks like `$TTSSS,field,...*HH` (conventional) or
`!AIVDM,field,...*HH` (encapsulated). The checksum `HH` is the XOR of
every byte between the leading sigil and the `*`.
"""

from dataclasses import dataclass
from enum import Enum
from functools import reduce
from operator import xor
from typing import Optional

from bosun.nmea.errors import (
    ChecksumNotFound,
    InvalidChecksum,
    MalformedChecksum,
    UnrecognizedEncoding,
)

CHECKSUM_FLAG = "*"
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class SentenceFormat(Enum):
    """Sentence encoding, selected by the leading sigil."""

    CONVENTIONAL = "$"
    ENCAPSULATED = "!"


@dataclass(frozen=True)
class Sentence:
    """A framed sentence whose checksum has been verified."""

    raw: str
    format: SentenceFormat
    payload: str
    checksum: int

    @property
    def fields(self) -> list[str]:
        """Comma-separated payload fields, empty fields included."""
        return self.payload.split(",")


def checksum(payload: str) -> int:
    """Compute the NMEA checksum of a payload."""
    return reduce(xor, payload.encode("utf-8"), 0)


def frame_sentence(line: str) -> Optional[Sentence]:
    """Split a raw line into format, payload and checksum.

    Args:
        line: One line read from the bus

    Returns:
        The framed sentence, or None for an empty line

    Raises:
        UnrecognizedEncoding: Leading character is not '$' or '!'
        ChecksumNotFound: No single '*' separating payload and checksum
        MalformedChecksum: Checksum is not two hex digits
        InvalidChecksum: Checksum does not match the payload
    """
    line = line.rstrip("\r\n")
    if not line:
        return None

    try:
        sentence_format = SentenceFormat(line[0])
    except ValueError:
        raise UnrecognizedEncoding(f"Unrecognized encoding: {line[0]!r}")

    parts = line[1:].split(CHECKSUM_FLAG)
    if len(parts) != 2:
        raise ChecksumNotFound(f"Checksum not found in {line!r}")

    payload, sum_str = parts
    if len(sum_str) != 2 or not HEX_DIGITS.issuperset(sum_str):
        raise MalformedChecksum(f"Malformed checksum: {sum_str!r}")

    expected = int(sum_str, 16)
    computed = checksum(payload)
    if expected != computed:
        raise InvalidChecksum(expected, computed)

    return Sentence(
        raw=line,
        format=sentence_format,
        payload=payload,
        checksum=expected,
    )

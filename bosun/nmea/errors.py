"""Errors raised while framing and dispatching NMEA sentences.

All of them concern a single sentence. Callers log them and carry on
with the next line.
"""


class NMEAError(Exception):
    """Base class for per-sentence processing errors."""


class UnrecognizedEncoding(NMEAError):
    """The sentence does not start with '$' or '!'."""


class ChecksumNotFound(NMEAError):
    """The sentence does not split into exactly one payload and checksum."""


class MalformedChecksum(NMEAError):
    """The checksum is not two hexadecimal digits."""


class InvalidChecksum(NMEAError):
    """The checksum does not match the payload."""

    def __init__(self, expected: int, computed: int):
        self.expected = expected
        self.computed = computed
        super().__init__(
            f"Expected payload sum: {expected:02X}, got {computed:02X}"
        )


class MalformedTag(NMEAError):
    """The sentence tag is too short to hold a talker and type."""

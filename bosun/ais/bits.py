"""Bit-level extraction for AIS armored payloads.

AIS payloads are carried as 6-bit ASCII armor. Each armor character is
dearmored into six bits, and the message fields are packed at arbitrary
bit offsets within the resulting sequence. This module works on the bit
sequence as a string of '0'/'1' characters.
"""

from typing import Optional

ARMOR_ALPHABET = (
    "0123456789:;<=>?@ABCDEFGHIJKLMNOPQRSTUVW`abcdefghijklmnopqrstuvw"
)

_ARMOR_TO_BITS: dict[str, str] = {
    char: format(index, "06b") for index, char in enumerate(ARMOR_ALPHABET)
}


def dearmor(payload: str) -> Optional[str]:
    """Convert an armored payload into its bit sequence.

    Args:
        payload: Armored payload, e.g. "15Mvht0P00o?aL0E`Vff4?wT2408"

    Returns:
        Bit sequence as a string of '0' and '1', or None if the payload
        contains a character outside the armor alphabet
    """
    groups = []
    for char in payload:
        bits = _ARMOR_TO_BITS.get(char)
        if bits is None:
            return None
        groups.append(bits)
    return "".join(groups)


def get_uint(bits: str, start: int, length: int) -> int:
    """Extract an unsigned integer.

    Returns 0 when the requested range runs past the end of the sequence.
    """
    if length <= 0 or start + length > len(bits):
        return 0
    return int(bits[start:start + length], 2)


def get_int(bits: str, start: int, length: int) -> int:
    """Extract a two's complement signed integer."""
    value = get_uint(bits, start, length)
    if length > 0 and value >= 1 << (length - 1):
        value -= 1 << length
    return value


def sixbit_char(value: int) -> str:
    """Map a 6-bit value to its AIS text character.

    0-31 map to '@' through '_', 32-63 map to ' ' through '?'.
    """
    if value < 32:
        return chr(value + 64)
    return chr(value)


def get_text(bits: str, start: int, length: int) -> str:
    """Extract 6-bit packed text.

    The text ends at the first '@' (padding) and is stripped of
    surrounding whitespace. Returns an empty string when the requested
    range runs past the end of the sequence.
    """
    if start + length > len(bits):
        return ""

    chunk = bits[start:start + length]
    text = "".join(
        sixbit_char(int(chunk[i:i + 6], 2)) for i in range(0, len(chunk), 6)
    )
    return text.partition("@")[0].strip()


class BitVector:
    """Dearmored AIS payload with field accessors.

    Example:
        >>> vector = BitVector.from_payload("15Mvht0P00o?aL0E`Vff4?wT2408")
        >>> vector.unsigned(0, 6)
        1
    """

    def __init__(self, bits: str):
        self.bits = bits

    @classmethod
    def from_payload(cls, payload: str) -> Optional["BitVector"]:
        """Dearmor a payload, returning None on an invalid armor character."""
        bits = dearmor(payload)
        if bits is None:
            return None
        return cls(bits)

    def __len__(self) -> int:
        return len(self.bits)

    def unsigned(self, start: int, length: int) -> int:
        return get_uint(self.bits, start, length)

    def signed(self, start: int, length: int) -> int:
        return get_int(self.bits, start, length)

    def text(self, start: int, length: int) -> str:
        return get_text(self.bits, start, length)

    def __repr__(self) -> str:
        return f"<BitVector(bits={len(self.bits)})>"

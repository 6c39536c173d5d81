"""AIS sub-protocol support for Bosun.

This module provides:
- 6-bit armor dearmoring and bit-field extraction
- Multi-fragment AIVDM reassembly
- Message decoding for position and static data reports
"""

from bosun.ais.bits import BitVector, dearmor, get_int, get_text, get_uint
from bosun.ais.decoder import decode_payload
from bosun.ais.models import AISReport, NavigationStatus, VesselType
from bosun.ais.reassembly import Fragment, FragmentError, FragmentReassembler

__all__ = [
    # Bits
    "BitVector",
    "dearmor",
    "get_int",
    "get_text",
    "get_uint",
    # Decoding
    "AISReport",
    "decode_payload",
    "NavigationStatus",
    "VesselType",
    # Reassembly
    "Fragment",
    "FragmentError",
    "FragmentReassembler",
]

"""AIS message decoder.

Interprets a dearmored AIS payload according to its message type.

Supported message types:
- 1, 2, 3: Class A position reports
- 5: Static and voyage related data
- 24: Class B static data report

Any other type decodes to the message type and MMSI only.
"""

import logging
from typing import Optional

from bosun.ais.bits import BitVector
from bosun.ais.models import AISReport

logger = logging.getLogger(__name__)

POSITION_REPORT_TYPES = frozenset({1, 2, 3})
STATIC_VOYAGE_TYPE = 5
CLASS_B_STATIC_TYPE = 24
CLASS_B_PART_B = 1

# 1/10000 minute resolution
COORDINATE_SCALE = 600000.0


def _text_or_none(value: str) -> Optional[str]:
    return value or None


def _decode_position_report(vector: BitVector) -> dict:
    return {
        "navigation_status_code": vector.unsigned(38, 4),
        "speed_over_ground": vector.unsigned(50, 10) / 10.0,
        "longitude": vector.signed(61, 28) / COORDINATE_SCALE,
        "latitude": vector.signed(89, 27) / COORDINATE_SCALE,
        "course_over_ground": vector.unsigned(116, 12) / 10.0,
        "true_heading": vector.unsigned(128, 9),
    }


def _decode_static_voyage(vector: BitVector) -> dict:
    return {
        "call_sign": _text_or_none(vector.text(70, 42)),
        "ship_name": _text_or_none(vector.text(112, 120)),
        "ship_type": vector.unsigned(232, 8),
    }


def _decode_class_b_static(vector: BitVector) -> dict:
    # Part B carries the ship type and call sign, Part A the name
    if vector.unsigned(38, 2) == CLASS_B_PART_B:
        return {
            "ship_type": vector.unsigned(40, 8),
            "call_sign": _text_or_none(vector.text(90, 42)),
        }

    return {
        "ship_name": _text_or_none(vector.text(40, 120)),
        "ship_type": vector.unsigned(232, 8),
    }


def decode_payload(payload: str) -> Optional[AISReport]:
    """Decode a complete (reassembled) AIS payload.

    Args:
        payload: Armored payload string

    Returns:
        AISReport, or None if the payload contains an invalid armor
        character
    """
    vector = BitVector.from_payload(payload)
    if vector is None:
        logger.debug(f"Invalid armor character in AIS payload: {payload}")
        return None

    message_type = vector.unsigned(0, 6)
    mmsi = vector.unsigned(8, 30)

    if message_type in POSITION_REPORT_TYPES:
        fields = _decode_position_report(vector)
    elif message_type == STATIC_VOYAGE_TYPE:
        fields = _decode_static_voyage(vector)
    elif message_type == CLASS_B_STATIC_TYPE:
        fields = _decode_class_b_static(vector)
    else:
        fields = {}

    return AISReport(message_type=message_type, mmsi=mmsi, **fields)

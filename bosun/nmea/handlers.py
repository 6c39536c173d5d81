"""Per-sentence-type handlers.

Every handler receives the fields following the sentence tag, the
navigation state to update, and the logbook for diagnostics. A handler
that cannot read its sentence logs why and leaves the state untouched.
"""

import logging
from typing import Callable, Optional, Sequence

from bosun.ais.decoder import decode_payload
from bosun.ais.reassembly import Fragment, FragmentError, FragmentReassembler
from bosun.logbook import Logbook
from bosun.nmea.state import Coordinates, NavigationState
from bosun.units import Fathoms, Feet, Meters

logger = logging.getLogger(__name__)

Fields = Sequence[str]
Handler = Callable[[Fields, NavigationState, Logbook], None]

DEPTH_UNITS = {
    "f": Feet,
    "M": Meters,
    "F": Fathoms,
}

HEADING_DIRECTION_SIGNS = {"E": 1.0, "W": -1.0, "": 0.0}
HEMISPHERE_SIGNS = {"N": 1.0, "S": -1.0, "E": 1.0, "W": -1.0}
FIX_STATUS_VALID = {"A": True, "V": False}


def _float_or_none(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None


def ignore(fields: Fields, state: NavigationState, log: Logbook) -> None:
    """Handler for recognized sentences that carry nothing we track."""


def process_transducer_depth(
    fields: Fields, state: NavigationState, log: Logbook
) -> None:
    """DBT - depth below transducer.

    Fields are three (measurement, unit) pairs for feet, meters and
    fathoms. The draft is the smallest of the readings present, in meters.
    """
    if len(fields) != 6:
        log.log(
            f"Expected six fields in transducer-depth sentence, but found {len(fields)}"
        )
        return

    readings: dict[str, Meters] = {}
    for index in range(0, 6, 2):
        measurement, unit = fields[index], fields[index + 1]

        value = _float_or_none(measurement)
        if value is None:
            log.log(f"Malformed measurement: {measurement!r}")
            continue

        unit_type = DEPTH_UNITS.get(unit)
        if unit_type is None:
            log.log(f"Unrecognized transducer depth unit: {unit!r}")
            continue

        readings[unit] = unit_type(value).in_meters

    if not readings:
        log.log("No depth measurements found")
        return

    state.draft = min(readings.values())


def process_heading(fields: Fields, state: NavigationState, log: Logbook) -> None:
    """HDG - heading, deviation and variation.

    Magnetic heading is the sensor heading corrected for deviation; true
    heading is magnetic corrected for variation.
    """
    if len(fields) != 5:
        log.log(f"Expected five fields in heading sentence, but found {len(fields)}")
        return

    def magnitude(value: str) -> Optional[float]:
        return 0.0 if value == "" else _float_or_none(value)

    sensor = _float_or_none(fields[0])
    deviation = magnitude(fields[1])
    deviation_sign = HEADING_DIRECTION_SIGNS.get(fields[2])
    variation = magnitude(fields[3])
    variation_sign = HEADING_DIRECTION_SIGNS.get(fields[4])

    if None in (sensor, deviation, deviation_sign, variation, variation_sign):
        log.log(f"Unable to read heading from {list(fields)}")
        return

    magnetic = sensor + deviation * deviation_sign
    state.heading_magnetic = magnetic
    state.heading_true = magnetic + variation * variation_sign


def process_geographic_position(
    fields: Fields, state: NavigationState, log: Logbook
) -> None:
    """GLL - geographic position.

    Fields: latitude, N/S, longitude, E/W, UTC time, status, mode. Only a
    fix with status 'A' updates the position.
    """
    if len(fields) != 7:
        log.log(
            f"Expected seven fields in geographic position sentence, but found {len(fields)}"
        )
        return

    latitude = _float_or_none(fields[0])
    latitude_sign = HEMISPHERE_SIGNS.get(fields[1])
    longitude = _float_or_none(fields[2])
    longitude_sign = HEMISPHERE_SIGNS.get(fields[3])
    valid = FIX_STATUS_VALID.get(fields[5])

    if None in (latitude, latitude_sign, longitude, longitude_sign, valid):
        log.log(f"Failed to read geographic position from {list(fields)}")
        return

    if valid:
        # DDMM.MMMM read as decimal degrees / 100
        state.position = Coordinates(
            latitude=latitude / 100 * latitude_sign,
            longitude=longitude / 100 * longitude_sign,
        )


class AISMessageHandler:
    """AIVDM/AIVDO - encapsulated AIS message fragments."""

    def __init__(self, reassembler: FragmentReassembler):
        self.reassembler = reassembler

    def __call__(self, fields: Fields, state: NavigationState, log: Logbook) -> None:
        try:
            fragment = Fragment.from_fields(fields)
        except FragmentError as e:
            log.log(str(e))
            return

        payload = self.reassembler.add(fragment)
        if payload is None:
            return

        report = decode_payload(payload)
        if report is None:
            logger.debug(f"Discarding undecodable AIS payload: {payload}")
            return

        state.upsert_target(report)

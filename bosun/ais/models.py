"""AIS report models and code tables."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class NavigationStatus(IntEnum):
    """Navigation status reported in Class A position reports.

    Each member carries its ITU-R M.1371 label in `display_text`.
    """

    def __new__(cls, code: int, label: str) -> "NavigationStatus":
        member = int.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member

    UNDERWAY_ENGINE = (0, "Under way using engine")
    AT_ANCHOR = (1, "At anchor")
    NOT_UNDER_COMMAND = (2, "Not under command")
    RESTRICTED_MANEUVERABILITY = (3, "Restricted manoeuvrability")
    CONSTRAINED_BY_DRAFT = (4, "Constrained by draught")
    MOORED = (5, "Moored")
    AGROUND = (6, "Aground")
    ENGAGED_IN_FISHING = (7, "Engaged in fishing")
    UNDERWAY_SAILING = (8, "Under way sailing")
    RESERVED_HSC = (9, "Reserved for HSC")
    RESERVED_WIG = (10, "Reserved for WIG")
    RESERVED_1 = (11, "Reserved")
    RESERVED_2 = (12, "Reserved")
    RESERVED_3 = (13, "Reserved")
    AIS_SART_ACTIVE = (14, "AIS-SART active")
    NOT_DEFINED = (15, "Not defined")

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional["NavigationStatus"]:
        """Look up a 4-bit status code; out-of-table codes are NOT_DEFINED."""
        if code is None:
            return None
        try:
            return cls(code)
        except ValueError:
            return cls.NOT_DEFINED

    @property
    def display_text(self) -> str:
        return self.label


class VesselType(Enum):
    """Coarse vessel category derived from the 8-bit AIS ship type."""

    CARGO = "Cargo"
    TANKER = "Tanker"
    PASSENGER = "Passenger"
    FISHING = "Fishing"
    MILITARY = "Military"
    PLEASURE_CRAFT = "Pleasure Craft"
    HIGH_SPEED_CRAFT = "High Speed Craft"
    TUG = "Tug"
    PILOT_VESSEL = "Pilot Vessel"
    SEARCH_AND_RESCUE = "Search And Rescue"
    DREDGER = "Dredger"
    LAW_ENFORCEMENT = "Law Enforcement"
    SAILING = "Sailing"
    OTHER = "Other"
    UNKNOWN = "Unknown"

    @classmethod
    def from_ais_code(cls, code: Optional[int]) -> "VesselType":
        """Map a ship type code to its category.

        Single codes in the 30s and 50s are checked before the decade
        ranges; 0 (or no code at all) means not available.
        """
        if not code:
            return cls.UNKNOWN

        if code in _SHIP_TYPE_CODES:
            return _SHIP_TYPE_CODES[code]

        for codes, vessel_type in _SHIP_TYPE_RANGES:
            if code in codes:
                return vessel_type
        return cls.OTHER

    @property
    def display_text(self) -> str:
        return self.value


_SHIP_TYPE_CODES = {
    30: VesselType.FISHING,
    31: VesselType.TUG,
    32: VesselType.TUG,
    33: VesselType.DREDGER,
    35: VesselType.MILITARY,
    36: VesselType.SAILING,
    37: VesselType.PLEASURE_CRAFT,
    50: VesselType.PILOT_VESSEL,
    51: VesselType.SEARCH_AND_RESCUE,
    52: VesselType.TUG,
    55: VesselType.LAW_ENFORCEMENT,
}

_SHIP_TYPE_RANGES = (
    (range(40, 50), VesselType.HIGH_SPEED_CRAFT),
    (range(60, 70), VesselType.PASSENGER),
    (range(70, 80), VesselType.CARGO),
    (range(80, 90), VesselType.TANKER),
)


@dataclass(frozen=True)
class AISReport:
    """Fields decoded from a single AIS message.

    Only the message type and MMSI are always present. The remaining
    fields are populated according to the message type and are None
    when the message does not carry them.
    """

    message_type: int
    mmsi: int

    # Position reports (types 1, 2, 3)
    navigation_status_code: Optional[int] = None
    speed_over_ground: Optional[float] = None  # knots
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    course_over_ground: Optional[float] = None  # degrees
    true_heading: Optional[int] = None  # degrees, 511 = not available

    # Static data (types 5, 24)
    ship_name: Optional[str] = None
    call_sign: Optional[str] = None
    ship_type: Optional[int] = None

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def navigation_status(self) -> Optional[NavigationStatus]:
        return NavigationStatus.from_code(self.navigation_status_code)

    @property
    def vessel_type(self) -> Optional[VesselType]:
        if self.ship_type is None:
            return None
        return VesselType.from_ais_code(self.ship_type)

    @property
    def mmsi_str(self) -> str:
        """Get MMSI as 9-digit string."""
        return f"{self.mmsi:09d}"

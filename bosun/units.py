"""Length units used by depth sounders.

Immutable value types with lossless conversion between feet, meters
and fathoms.
"""

from dataclasses import dataclass
from functools import total_ordering

METERS_PER_FOOT = 0.3048
FEET_PER_FATHOM = 6.0


@total_ordering
@dataclass(frozen=True)
class Meters:
    """Length in meters."""

    value: float

    @property
    def in_meters(self) -> "Meters":
        return self

    @property
    def in_feet(self) -> "Feet":
        return Feet(self.value / METERS_PER_FOOT)

    @property
    def in_fathoms(self) -> "Fathoms":
        return Fathoms(self.value / METERS_PER_FOOT / FEET_PER_FATHOM)

    def __lt__(self, other: "Meters") -> bool:
        if not isinstance(other, Meters):
            return NotImplemented
        return self.value < other.value

    def __str__(self) -> str:
        return f"{self.value:.2f} m"


@dataclass(frozen=True)
class Feet:
    """Length in feet."""

    value: float

    @property
    def in_meters(self) -> Meters:
        return Meters(self.value * METERS_PER_FOOT)

    @property
    def in_feet(self) -> "Feet":
        return self

    @property
    def in_fathoms(self) -> "Fathoms":
        return Fathoms(self.value / FEET_PER_FATHOM)

    @property
    def feet(self) -> int:
        """Whole feet."""
        return int(self.value)

    @property
    def inches(self) -> int:
        """Whole inches left over after the whole feet."""
        return int((self.value - self.feet) * 12)

    def __str__(self) -> str:
        return f"{self.feet}' {self.inches}\""


@dataclass(frozen=True)
class Fathoms:
    """Length in fathoms (6 feet)."""

    value: float

    @property
    def in_meters(self) -> Meters:
        return self.in_feet.in_meters

    @property
    def in_feet(self) -> Feet:
        return Feet(self.value * FEET_PER_FATHOM)

    @property
    def in_fathoms(self) -> "Fathoms":
        return self

    def __str__(self) -> str:
        return f"{self.value:.2f} fathoms"

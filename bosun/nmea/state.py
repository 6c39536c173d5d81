"""Navigation state shared by the sentence handlers.

A single mutable record updated as sentences arrive. Every field stays
None until the first sentence defining it is received.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterator, Optional

from bosun.ais.models import AISReport, NavigationStatus
from bosun.units import Meters

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Coordinates:
    """Latitude and longitude in decimal degrees (positive = N/E)."""

    latitude: float
    longitude: float

    def to_tuple(self) -> tuple[float, float]:
        """Return as (lat, lon) tuple."""
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return "{:05.2f}°{} {:06.2f}°{}".format(
            abs(self.latitude),
            "S" if self.latitude < 0 else "N",
            abs(self.longitude),
            "W" if self.longitude < 0 else "E",
        )


@dataclass
class AISTarget:
    """Most recent information about a vessel seen over AIS."""

    mmsi: int
    created_at: datetime
    updated_at: datetime
    name: Optional[str] = None
    position: Optional[Coordinates] = None
    call_sign: Optional[str] = None
    ship_type: Optional[int] = None
    speed_over_ground: Optional[float] = None
    course_over_ground: Optional[float] = None
    heading: Optional[int] = None
    navigation_status: Optional[NavigationStatus] = None

    def apply(self, report: AISReport, now: datetime) -> None:
        """Merge a report, keeping fields the report does not supply."""
        self.updated_at = now

        if report.ship_name:
            self.name = report.ship_name
        if report.has_position:
            self.position = Coordinates(report.latitude, report.longitude)
        if report.call_sign:
            self.call_sign = report.call_sign
        if report.ship_type:
            self.ship_type = report.ship_type
        if report.speed_over_ground is not None:
            self.speed_over_ground = report.speed_over_ground
        if report.course_over_ground is not None:
            self.course_over_ground = report.course_over_ground
        if report.true_heading is not None:
            self.heading = report.true_heading
        if report.navigation_status is not None:
            self.navigation_status = report.navigation_status


class AISTargets:
    """AIS targets keyed by MMSI."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._targets: dict[int, AISTarget] = {}

    def __len__(self) -> int:
        return len(self._targets)

    def __contains__(self, mmsi: object) -> bool:
        return mmsi in self._targets

    def __iter__(self) -> Iterator[AISTarget]:
        return iter(list(self._targets.values()))

    def get(self, mmsi: int) -> Optional[AISTarget]:
        return self._targets.get(mmsi)

    def upsert(self, report: AISReport) -> AISTarget:
        """Locate or create the target for a report's MMSI and merge it.

        Args:
            report: Decoded AIS report

        Returns:
            The updated target
        """
        now = self._clock()
        target = self._targets.get(report.mmsi)
        if target is None:
            target = AISTarget(mmsi=report.mmsi, created_at=now, updated_at=now)
            self._targets[report.mmsi] = target
            logger.debug(f"New AIS target: {report.mmsi_str}")

        target.apply(report, now)
        return target

    def prune(self, max_age: timedelta) -> int:
        """Drop targets not updated within max_age.

        Returns:
            Number of targets removed
        """
        cutoff = self._clock() - max_age
        stale = [
            mmsi for mmsi, target in self._targets.items()
            if target.updated_at < cutoff
        ]
        for mmsi in stale:
            del self._targets[mmsi]

        if stale:
            logger.info(f"Pruned {len(stale)} stale AIS targets")
        return len(stale)

    def clear(self) -> None:
        self._targets.clear()


@dataclass
class NavigationState:
    """Live vessel-state snapshot."""

    draft: Optional[Meters] = None
    heading_magnetic: Optional[float] = None
    heading_true: Optional[float] = None
    position: Optional[Coordinates] = None
    ais: Optional[AISTargets] = None

    # Clock used for AIS target timestamps
    clock: Callable[[], datetime] = field(default=utcnow, repr=False, compare=False)

    def upsert_target(self, report: AISReport) -> AISTarget:
        """Merge an AIS report into the target store, creating it on first use."""
        if self.ais is None:
            self.ais = AISTargets(clock=self.clock)
        return self.ais.upsert(report)

    def reset(self) -> None:
        """Clear every field."""
        self.draft = None
        self.heading_magnetic = None
        self.heading_true = None
        self.position = None
        self.ais = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "draft": self.draft.value if self.draft is not None else None,
            "heading_magnetic": self.heading_magnetic,
            "heading_true": self.heading_true,
            "latitude": self.position.latitude if self.position else None,
            "longitude": self.position.longitude if self.position else None,
            "ais_target_count": len(self.ais) if self.ais is not None else 0,
        }

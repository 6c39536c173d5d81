"""Abstract base class for NMEA line sources.

Defines the interface that every source of raw sentences implements.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Optional

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """Exception raised when reading from a source fails."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        super().__init__(f"[{source}] {message}" if source else message)


class SourceConfigError(SourceError):
    """Exception raised when a source is misconfigured."""


@dataclass
class SourceInfo:
    """Metadata about a line source."""

    name: str
    source_type: str
    is_active: bool
    last_line_at: Optional[datetime] = None
    total_lines_received: int = 0
    extra_info: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "type": self.source_type,
            "is_active": self.is_active,
            "last_line_at": (
                self.last_line_at.isoformat() if self.last_line_at else None
            ),
            "total_lines_received": self.total_lines_received,
            "extra_info": self.extra_info,
        }


class NMEASource(ABC):
    """Abstract base class for all NMEA line sources.

    Implementations must provide:
    - lines(): Yield raw sentences, one per line, in arrival order
    - health_check(): Verify the source is delivering
    - get_source_info(): Return metadata about the source
    """

    source_type = "unknown"

    def __init__(self, config: dict[str, Any]):
        """Initialize source with configuration.

        Args:
            config: Source-specific configuration dictionary
        """
        self.config = config
        self.name = config.get("name", self.source_type)
        self._total_lines = 0
        self._last_line_at: Optional[datetime] = None
        self._is_started = False

    @abstractmethod
    def lines(self) -> AsyncIterator[str]:
        """Yield raw lines until the source is exhausted or stopped.

        Raises:
            SourceError: If reading fails
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the source is available and healthy."""

    async def start(self) -> None:
        """Open the source (e.g. connect).

        Override in subclasses that need initialization.
        """
        self._is_started = True
        logger.info(f"Source '{self.name}' started")

    async def stop(self) -> None:
        """Close the source.

        Override in subclasses that need cleanup.
        """
        self._is_started = False
        logger.info(f"Source '{self.name}' stopped")

    def get_source_info(self) -> SourceInfo:
        return SourceInfo(
            name=self.name,
            source_type=self.source_type,
            is_active=self._is_started,
            last_line_at=self._last_line_at,
            total_lines_received=self._total_lines,
        )

    def _record_line(self) -> None:
        self._total_lines += 1
        self._last_line_at = datetime.now(timezone.utc)

    @property
    def is_started(self) -> bool:
        """Check if source has been started."""
        return self._is_started

    @property
    def total_lines(self) -> int:
        return self._total_lines

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"

"""TCP line source.

Connects to an NMEA 0183 multiplexer or gateway (e.g. port 10110) and
yields the sentences it streams.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Optional

from bosun.sources.base import NMEASource, SourceConfigError, SourceError

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 1024


def parse_address(address: str) -> tuple[str, int]:
    """Split a "host:port" address.

    Raises:
        SourceConfigError: If the port is missing or invalid
    """
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise SourceConfigError("NMEA address is missing a port number", source="tcp")

    try:
        port_number = int(port)
    except ValueError:
        raise SourceConfigError("NMEA address has invalid port number", source="tcp")

    if not 0 < port_number < 65536:
        raise SourceConfigError("NMEA address has invalid port number", source="tcp")

    return host, port_number


class TCPSource(NMEASource):
    """Reads sentences from a TCP stream."""

    source_type = "tcp"

    def __init__(self, config: dict[str, Any]):
        """Initialize TCP source.

        Config options:
            name: Source name
            address: "host:port" to connect to
            connect_timeout_seconds: Connection timeout (default: 10)
        """
        super().__init__(config)
        self.host, self.port = parse_address(config.get("address", ""))
        self.connect_timeout: float = config.get("connect_timeout_seconds", 10)

        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None

    async def start(self) -> None:
        """Open the connection."""
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port, limit=MAX_LINE_LENGTH * 64),
                timeout=self.connect_timeout,
            )
        except (OSError, asyncio.TimeoutError) as e:
            raise SourceError(f"Connection failed: {e}", source=self.name)

        self._is_started = True
        logger.info(f"Connected to {self.host}:{self.port}")

    async def stop(self) -> None:
        """Close the connection."""
        if self._writer is not None:
            self._writer.close()
            try:
                await self._writer.wait_closed()
            except OSError as e:
                logger.warning(f"Error closing connection: {e}")
            logger.info("Connection cancelled")

        self._reader = None
        self._writer = None
        self._is_started = False

    async def lines(self) -> AsyncIterator[str]:
        if self._reader is None:
            raise SourceError("Source is not connected", source=self.name)

        while True:
            try:
                raw = await self._reader.readline()
            except (asyncio.LimitOverrunError, ValueError) as e:
                # The reader has already dropped the oversized chunk
                logger.warning(f"Discarding overlong line from {self.host}:{self.port}: {e}")
                continue
            except OSError as e:
                raise SourceError(f"Receive error: {e}", source=self.name)

            if not raw:
                logger.info("Connection closed by server")
                self._is_started = False
                return

            self._record_line()
            yield raw.decode("ascii", errors="replace").strip()

    async def health_check(self) -> bool:
        return (
            self._is_started
            and self._writer is not None
            and not self._writer.is_closing()
        )

    def get_source_info(self):
        info = super().get_source_info()
        info.extra_info = {"address": f"{self.host}:{self.port}"}
        return info

"""Append-only diagnostic log.

Holds the raw sentences accepted from the bus alongside the decoder's
own diagnostics, for display to the operator. Entries are bounded; the
oldest are dropped first.
"""

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 65536


class Logbook:
    """Bounded, append-only list of log lines."""

    def __init__(
        self,
        entries: Optional[Iterable[str]] = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        self.max_entries = max_entries
        self._entries: deque[str] = deque(entries or (), maxlen=max_entries)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, line: str) -> None:
        """Append a raw line as-is."""
        self._entries.append(line)

    def log(self, message: str, level: int = logging.INFO) -> str:
        """Append a timestamped diagnostic and mirror it to logging.

        Returns:
            The entry as stored, "<ISO 8601 timestamp> | <message>"
        """
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        entry = f"{timestamp} | {message}"
        self._entries.append(entry)
        logger.log(level, message)
        return entry

    def tail(self, limit: int) -> list[str]:
        """Get the most recent entries, oldest first."""
        if limit <= 0:
            return []
        return list(self._entries)[-limit:]

    def reset(self) -> None:
        self._entries.clear()

    def export(self) -> str:
        """All entries as one text document, one entry per line."""
        return "\n".join(self._entries)

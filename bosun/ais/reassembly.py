"""AIS multi-fragment message reassembly.

AIVDM sentences carry at most one fragment of an AIS payload. Longer
messages (e.g. type 5) are split across several sentences sharing a
sequential message id. Fragments are appended in arrival order until
the final one arrives, at which point the whole payload is released.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

AIVDM_FIELD_COUNT = 6


class FragmentError(ValueError):
    """Raised when an AIVDM field list cannot be read."""


@dataclass
class Fragment:
    """One AIVDM fragment."""

    total: int
    number: int
    message_id: int
    channel: str
    payload: str
    fill_bits: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "Fragment":
        """Read a fragment from the fields following the AIVDM tag.

        Non-numeric fragment counts default to 1 and an empty message id
        defaults to 0.

        Raises:
            FragmentError: If the field count is not six
        """
        if len(fields) != AIVDM_FIELD_COUNT:
            raise FragmentError(
                f"Expected six fields in AIS sentence, but found {len(fields)}"
            )

        return cls(
            total=_int_or(fields[0], 1),
            number=_int_or(fields[1], 1),
            message_id=_int_or(fields[2], 0),
            channel=fields[3],
            payload=fields[4],
            fill_bits=fields[5],
        )


def _int_or(value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class _PendingMessage:
    payload: str
    started_at: float


class FragmentReassembler:
    """Buffers AIS payload fragments keyed by sequential message id."""

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        max_pending: int = 10,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize reassembler.

        Args:
            ttl_seconds: Age after which an incomplete message is dropped
                (0 disables expiry)
            max_pending: Maximum number of incomplete messages kept
            clock: Monotonic time source
        """
        self.ttl_seconds = ttl_seconds
        self.max_pending = max_pending
        self._clock = clock
        self._pending: OrderedDict[int, _PendingMessage] = OrderedDict()
        self._evicted = 0

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def evicted_count(self) -> int:
        return self._evicted

    def pending_payload(self, message_id: int) -> Optional[str]:
        """Get the partial payload buffered for a message id."""
        pending = self._pending.get(message_id)
        return pending.payload if pending else None

    def add(self, fragment: Fragment) -> Optional[str]:
        """Add a fragment.

        Args:
            fragment: Fragment read from an AIVDM sentence

        Returns:
            The complete payload once the final fragment has arrived,
            otherwise None
        """
        now = self._clock()
        self._expire(now)

        if fragment.total <= 1:
            self._pending.pop(fragment.message_id, None)
            return fragment.payload

        pending = self._pending.get(fragment.message_id)
        if pending is None:
            pending = _PendingMessage(payload="", started_at=now)
            self._pending[fragment.message_id] = pending
            self._enforce_capacity()
        pending.payload += fragment.payload

        if fragment.number < fragment.total:
            return None

        del self._pending[fragment.message_id]
        return pending.payload

    def clear(self) -> None:
        self._pending.clear()

    def _expire(self, now: float) -> None:
        if self.ttl_seconds <= 0:
            return

        stale = [
            message_id
            for message_id, pending in self._pending.items()
            if now - pending.started_at > self.ttl_seconds
        ]
        for message_id in stale:
            logger.debug(f"Dropping incomplete AIS message {message_id}")
            del self._pending[message_id]
            self._evicted += 1

    def _enforce_capacity(self) -> None:
        while self.max_pending > 0 and len(self._pending) > self.max_pending:
            message_id, _ = self._pending.popitem(last=False)
            logger.debug(f"Too many incomplete AIS messages, dropping {message_id}")
            self._evicted += 1

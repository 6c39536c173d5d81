"""Reader loop feeding a line source into a decoder.

The loop is the only writer of the decoder's state: lines are processed
one at a time, in arrival order, on a single task.
"""

import logging
from datetime import timedelta
from typing import Any, Optional

from bosun.nmea.decoder import NMEADecoder
from bosun.sources.base import NMEASource, SourceError

logger = logging.getLogger(__name__)


class FeedStatistics:
    """Counters for one run of the reader loop."""

    def __init__(self) -> None:
        self.lines = 0
        self.processed = 0
        self.failed = 0
        self.targets_pruned = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines": self.lines,
            "processed": self.processed,
            "failed": self.failed,
            "targets_pruned": self.targets_pruned,
        }


async def run_feed(
    source: NMEASource,
    decoder: NMEADecoder,
    target_ttl: Optional[timedelta] = None,
    statistics: Optional[FeedStatistics] = None,
) -> FeedStatistics:
    """Feed every line from a started source into the decoder.

    Bad sentences are logged by the decoder and skipped. Returns when the
    source is exhausted or closed.

    Args:
        source: Started line source
        decoder: Decoder receiving the lines
        target_ttl: Drop AIS targets not updated within this age
        statistics: Counters to update (a fresh set if omitted)

    Returns:
        The feed counters

    Raises:
        SourceError: If the source fails while reading
    """
    stats = statistics if statistics is not None else FeedStatistics()

    try:
        async for line in source.lines():
            stats.lines += 1
            if decoder.feed(line):
                stats.processed += 1
            else:
                stats.failed += 1

            if target_ttl is not None and decoder.state.ais is not None:
                stats.targets_pruned += decoder.state.ais.prune(target_ttl)
    except SourceError as e:
        decoder.log.log(str(e), level=logging.ERROR)
        raise

    logger.info(f"Feed from {source.name} finished: {stats.to_dict()}")
    return stats

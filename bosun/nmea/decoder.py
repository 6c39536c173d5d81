"""NMEA sentence decoder.

Frames and validates each line, then routes its fields to the handler
registered for the sentence type:

- Conventional sentences (`$`) are keyed by the 3-letter type following
  the 2-letter talker id (e.g. `DBT` in `YDDBT`).
- Encapsulated sentences (`!`) are keyed by the whole tag (e.g. `AIVDM`).
"""

import logging
from typing import Optional

from bosun.ais.reassembly import FragmentReassembler
from bosun.logbook import Logbook
from bosun.nmea import handlers
from bosun.nmea.errors import MalformedTag, NMEAError
from bosun.nmea.framing import Sentence, SentenceFormat, frame_sentence
from bosun.nmea.state import NavigationState

logger = logging.getLogger(__name__)

TALKER_LENGTH = 2
TYPE_LENGTH = 3


class NMEADecoder:
    """Decodes NMEA sentences into a navigation state.

    One decoder owns its state, its AIS fragment buffer and its logbook.
    Sentences must be fed from a single task, one at a time.
    """

    def __init__(
        self,
        state: Optional[NavigationState] = None,
        log: Optional[Logbook] = None,
        reassembler: Optional[FragmentReassembler] = None,
    ):
        """Initialize decoder.

        Args:
            state: Navigation state to update (a fresh one if omitted)
            log: Diagnostic logbook (a fresh one if omitted)
            reassembler: AIS fragment buffer (a fresh one if omitted)
        """
        self.state = state if state is not None else NavigationState()
        self.log = log if log is not None else Logbook()
        self.reassembler = reassembler if reassembler is not None else FragmentReassembler()

        ais_handler = handlers.AISMessageHandler(self.reassembler)
        self.recognized_types: dict[str, handlers.Handler] = {
            "DBT": handlers.process_transducer_depth,
            "GGA": handlers.ignore,
            "GLL": handlers.process_geographic_position,
            "GSA": handlers.ignore,
            "GSV": handlers.ignore,
            "HDG": handlers.process_heading,
            "HDM": handlers.ignore,
            "HDT": handlers.ignore,
            "AIVDM": ais_handler,
            "AIVDO": ais_handler,
        }
        self.unrecognized_types: set[str] = set()

        self._accepted = 0
        self._rejected = 0

    def process_sentence(self, line: str) -> None:
        """Frame, validate and dispatch one line.

        Args:
            line: Raw line from the bus; an empty line is ignored

        Raises:
            NMEAError: If the line cannot be framed or its tag is malformed
        """
        try:
            sentence = frame_sentence(line)
        except NMEAError as e:
            self._rejected += 1
            self.log.log(str(e), level=logging.WARNING)
            raise

        if sentence is None:
            return

        self._accepted += 1
        self.log.append(sentence.raw)

        try:
            if sentence.format is SentenceFormat.CONVENTIONAL:
                self._dispatch_conventional(sentence)
            else:
                self._dispatch_encapsulated(sentence)
        except MalformedTag as e:
            self._rejected += 1
            self.log.log(str(e), level=logging.WARNING)
            raise

    def feed(self, line: str) -> bool:
        """Process a line, logging instead of raising on a bad sentence.

        Returns:
            True if the line was processed without error
        """
        try:
            self.process_sentence(line)
        except NMEAError as e:
            logger.debug(f"Failed to process {line!r}: {e}")
            return False
        return True

    def reset(self) -> None:
        """Reinitialize the state and drop buffered AIS fragments."""
        self.state.reset()
        self.reassembler.clear()
        self.unrecognized_types.clear()

    def get_statistics(self) -> dict[str, int]:
        return {
            "accepted_sentences": self._accepted,
            "rejected_sentences": self._rejected,
            "unrecognized_types": len(self.unrecognized_types),
            "pending_ais_fragments": self.reassembler.pending_count,
            "evicted_ais_fragments": self.reassembler.evicted_count,
        }

    def _dispatch_conventional(self, sentence: Sentence) -> None:
        fields = sentence.fields
        tag = fields[0]
        if len(tag) < TALKER_LENGTH + TYPE_LENGTH:
            raise MalformedTag(f"Malformed tag: {tag!r}")

        sentence_type = tag[TALKER_LENGTH:TALKER_LENGTH + TYPE_LENGTH]
        self._dispatch(sentence_type, fields[1:], sentence)

    def _dispatch_encapsulated(self, sentence: Sentence) -> None:
        fields = sentence.fields
        marker = fields[0]
        if not marker:
            raise MalformedTag("Missing encapsulated sentence marker")

        self._dispatch(marker, fields[1:], sentence)

    def _dispatch(self, key: str, fields: list[str], sentence: Sentence) -> None:
        handler = self.recognized_types.get(key)
        if handler is not None:
            handler(fields, self.state, self.log)
        elif key not in self.unrecognized_types:
            self.unrecognized_types.add(key)
            self.log.log(f"Unrecognized sentence: {sentence.payload}")

    def __repr__(self) -> str:
        return f"<NMEADecoder(accepted={self._accepted}, rejected={self._rejected})>"


# Global decoder instance (initialized on startup)
_decoder: Optional[NMEADecoder] = None


def get_decoder() -> Optional[NMEADecoder]:
    """Get the global decoder instance.

    Returns:
        NMEADecoder if initialized, None otherwise
    """
    return _decoder


def set_decoder(decoder: Optional[NMEADecoder]) -> None:
    """Set the global decoder instance."""
    global _decoder
    _decoder = decoder

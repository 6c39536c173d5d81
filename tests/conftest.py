"""Shared fixtures for Bosun tests."""

from typing import Callable

import pytest

from bosun.nmea.decoder import NMEADecoder
from bosun.nmea.framing import checksum


@pytest.fixture
def decoder() -> NMEADecoder:
    return NMEADecoder()


@pytest.fixture
def sentence() -> Callable[[str], str]:
    """Build a sentence with a correct checksum, e.g. sentence("$YDHDG,...")."""

    def build(body: str) -> str:
        return f"{body}*{checksum(body[1:]):02X}"

    return build

"""Sample data replay source.

Replays a recorded capture, either the bundled one or a file of raw
sentences, one line at a time.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, AsyncIterator, Optional

from bosun.sources.base import NMEASource, SourceConfigError

logger = logging.getLogger(__name__)

# Capture from a Yacht Devices gateway (talker YD), 2025-02-15
SAMPLE_SENTENCES = [
    "$YDGSV,3,1,12,06,19,043,38,11,53,045,41,12,76,144,48,20,48,106,45*75",
    "$YDGSV,3,2,12,24,10,199,43,25,59,305,43,29,31,287,46,05,31,152,43*7A",
    "$YDGSV,3,3,12,28,12,313,34,74,61,189,40,75,51,315,45,73,18,164,42*77",
    "$YDGSA,M,3,06,11,12,20,24,25,29,05,28,74,75,73,0.7,0.9,,1*0E",
    "$YDGGA,000250.00,3745.3487,N,12218.2355,W,1,12,0.70,-29.29,M,-25.20,M,0.00,0000*68",
    "$YDMDA,,I,,B,,C,17.8,C,,,,C,272.2,T,259.5,M,16.3,N,8.4,M*21",
    "$YDHDG,185.2,,,12.7,E*05",
    "$YDDPT,4.08,-1.67,*50",
    "$YDMWV,58.3,R,10.1,M,A*2D",
    "$YDMWV,73.2,T,8.4,M,A*1F",
    "$YDVTG,210.1,T,197.4,M,6.0,N,11.2,K,A*14",
    "!AIVDM,1,1,,B,35NQH10Oh:o@<vFEWwgECakV01kP,0*29",
    "!AIVDM,1,1,,A,15Mvht0P00o?aL0E`Vff4?wT2408,0*7D",
    "$YDVWR,61.6,R,19.7,N,10.2,M,36.5,K*59",
    "$YDVWT,74.2,R,16.4,N,8.5,M,30.4,K*6A",
    "!AIVDM,1,1,,B,15N7G;0000G@6P6Ea5Be>q5T00Rn,0*57",
    "!AIVDM,1,1,,B,15NO>Dd000o?nBBEd980iRKV2HMf,0*57",
    "!AIVDM,1,1,,A,15MjHDP047o?`JTEc2;Ln:CV0D2s,0*53",
    "!AIVDM,1,1,,B,15MvrUP000G@FKjEUtDim1UR0000,0*2F",
    "$YDGLL,3745.3498,N,12218.2354,W,000250.00,A,A*7D",
    "$YDRMC,000250.00,A,3745.3498,N,12218.2354,W,6.7,214.2,150225,12.8,E,A,C*70",
    "$YDHTD,V,,,,,,,,,,,0.0,T,,,,*45",
    "$YDZDA,000250.06,15,02,2025,,*6E",
    "$YDROT,-220.8,A*1E",
    "$YDHDG,183.7,,,12.8,E*09",
    "$YDHDM,183.7,M*32",
    "$YDHDT,196.5,T*34",
    "$YDMWD,272.2,T,259.4,M,16.4,N,8.4,M*69",
    "$YDMWV,65.2,R,9.9,M,A*12",
    "$YDMWV,74.8,T,8.4,M,A*12",
    "$YDDPT,4.08,-1.67,*50",
    "$YDDBT,13.3,f,4.08,M,2.23,F*32",
    "$YDDBS,7.9,f,2.41,M,1.31,F*01",
    "$YDVHW,196.5,T,183.7,M,5.6,N,10.4,K*78",
    "$YDVTG,214.2,T,201.4,M,6.7,N,12.5,K,A*1C",
    "$YDVLW,14332.946,N,109.715,N*57",
    "$YDRSA,-15.7,A,,V*7A",
    "$YDMTW,17.8,C*00",
    "!AIVDM,1,1,,A,403OthivTWP2jo@FfNEjH@O02L3E,0*47",
    "!AIVDM,1,1,,A,15NGdT?P00G?n=8Edi39b?wV2<2J,0*2F",
    "!AIVDM,1,1,,B,15NH7?PP01o@7C0E`vVf4?wT28Ms,0*3A",
    "!AIVDM,1,1,,B,403OtVQvTWP2koCklLEpHDg028Mw,0*6B",
    "!AIVDM,1,1,,A,15MiuGPP5bG?NqlEd2AmUww`0<28,0*44",
    "!AIVDM,2,1,5,A,55NDS<`00001L@G??S84h<5A85b0HiTE8000001S1@N55t0Ht008000,0*5A",
    "!AIVDM,2,2,5,A,0000000000000000,2*11",
    "!AIVDM,1,1,,A,15NDS<PP1;o?WlvEa9In4gw828ED,0*7D",
]


class SampleSource(NMEASource):
    """Replays recorded sentences at a fixed interval."""

    source_type = "sample"

    def __init__(self, config: dict[str, Any]):
        """Initialize sample source.

        Config options:
            name: Source name
            sample_file: File of raw sentences (default: bundled capture)
            interval_seconds: Delay between lines (default: 0.5)
            loop: Restart from the top when exhausted (default: False)
        """
        super().__init__(config)
        self.sample_file: Optional[str] = config.get("sample_file")
        self.interval: float = config.get("interval_seconds", 0.5)
        self.loop: bool = config.get("loop", False)
        self._sentences: list[str] = []

    async def start(self) -> None:
        """Load the sentences to replay."""
        if self.sample_file:
            path = Path(self.sample_file)
            if not path.exists():
                raise SourceConfigError(
                    f"Sample file not found: {self.sample_file}", source=self.name
                )
            self._sentences = path.read_text(encoding="ascii", errors="replace").splitlines()
            logger.info(f"Loaded {len(self._sentences)} sentences from {path}")
        else:
            self._sentences = list(SAMPLE_SENTENCES)

        self._is_started = True

    async def lines(self) -> AsyncIterator[str]:
        if not self._sentences:
            return

        while self._is_started:
            for sentence in self._sentences:
                if not self._is_started:
                    return
                self._record_line()
                yield sentence
                await asyncio.sleep(self.interval)

            if not self.loop:
                return

    async def health_check(self) -> bool:
        return self._is_started and bool(self._sentences)

    def get_source_info(self):
        info = super().get_source_info()
        info.extra_info = {
            "sample_file": self.sample_file,
            "sentence_count": len(self._sentences),
            "loop": self.loop,
        }
        return info

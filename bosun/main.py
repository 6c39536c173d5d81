"""Bosun web service.

On startup the lifespan builds the decoder, opens the configured line
source and starts one reader task feeding it. The HTTP endpoints only
read the decoder.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bosun import __version__
from bosun.ais.reassembly import FragmentReassembler
from bosun.api import router as api_router
from bosun.config import Settings, get_settings
from bosun.feed import FeedStatistics, run_feed
from bosun.logbook import Logbook
from bosun.nmea.decoder import NMEADecoder, get_decoder, set_decoder
from bosun.sources import NMEASource, SourceError, create_source_from_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_decoder(settings: Settings) -> NMEADecoder:
    """Build a decoder bounded by the configured limits."""
    return NMEADecoder(
        log=Logbook(max_entries=settings.log_max_entries),
        reassembler=FragmentReassembler(
            ttl_seconds=settings.fragment_ttl_seconds,
            max_pending=settings.max_pending_fragments,
        ),
    )


async def _feed_forever(
    source: NMEASource,
    decoder: NMEADecoder,
    statistics: FeedStatistics,
) -> None:
    target_ttl: Optional[timedelta] = None
    if settings.ais_target_ttl_seconds > 0:
        target_ttl = timedelta(seconds=settings.ais_target_ttl_seconds)

    try:
        await source.start()
        await run_feed(source, decoder, target_ttl=target_ttl, statistics=statistics)
    except SourceError as e:
        logger.error(f"NMEA source failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start the decoder and reader task, and stop them on shutdown."""
    logger.info(f"Starting {settings.app_name} ({settings.environment})")

    decoder = create_decoder(settings)
    set_decoder(decoder)

    app.state.source = None
    app.state.feed_task = None
    app.state.feed_statistics = FeedStatistics()

    try:
        source = create_source_from_settings(settings)
        app.state.source = source
        app.state.feed_task = asyncio.create_task(
            _feed_forever(source, decoder, app.state.feed_statistics)
        )
        logger.info(f"Reading NMEA sentences from {source.name}")
    except SourceError as e:
        logger.error(f"Failed to create NMEA source: {e}")
        logger.warning("Running without an NMEA source")

    yield

    logger.info("Shutting down")

    if app.state.feed_task is not None:
        app.state.feed_task.cancel()
        try:
            await app.state.feed_task
        except asyncio.CancelledError:
            pass

    if app.state.source is not None:
        await app.state.source.stop()

    set_decoder(None)
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.app_name,
    description=(
        "Live vessel state decoded from an NMEA 0183 instrument bus: depth, "
        "heading, position, AIS targets and the diagnostic log. "
        "Versioned endpoints live under `/api/v1`."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str | bool]:
    """Report whether the decoder is installed and the source is delivering."""
    decoder_ready = get_decoder() is not None

    source = getattr(app.state, "source", None)
    source_healthy = source is not None and await source.health_check()

    return {
        "status": "healthy" if decoder_ready and source_healthy else "degraded",
        "service": "bosun",
        "environment": settings.environment,
        "decoder": decoder_ready,
        "nmea_source": source_healthy,
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Service name and version."""
    return {
        "service": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "docs": "/docs" if settings.debug else "disabled",
    }


@app.get("/status")
async def system_status() -> dict[str, Any]:
    """Decoder counters and state, source info and feed counters."""
    decoder = get_decoder()
    source = getattr(app.state, "source", None)
    statistics = getattr(app.state, "feed_statistics", None)

    return {
        "service": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "decoder": decoder.get_statistics() if decoder else None,
        "state": decoder.state.to_dict() if decoder else None,
        "source": source.get_source_info().to_dict() if source else None,
        "feed": statistics.to_dict() if statistics else None,
    }

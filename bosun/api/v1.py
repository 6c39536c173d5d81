"""Navigation state API endpoints.

Provides read-only endpoints for:
- The current navigation state
- Tracked AIS targets
- The diagnostic log and its export
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from bosun.ais.models import VesselType
from bosun.api.schemas import (
    AISTargetListResponse,
    AISTargetResponse,
    LogResponse,
    NavigationStateResponse,
)
from bosun.nmea.decoder import NMEADecoder, get_decoder
from bosun.nmea.state import AISTarget

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Navigation"])


def require_decoder() -> NMEADecoder:
    """Dependency returning the running decoder, or 503 if there is none."""
    decoder = get_decoder()
    if decoder is None:
        raise HTTPException(status_code=503, detail="Decoder not initialized")
    return decoder


def _target_response(target: AISTarget) -> AISTargetResponse:
    status = target.navigation_status
    return AISTargetResponse(
        mmsi=f"{target.mmsi:09d}",
        name=target.name,
        call_sign=target.call_sign,
        ship_type=target.ship_type,
        ship_type_text=(
            VesselType.from_ais_code(target.ship_type).display_text
            if target.ship_type is not None
            else None
        ),
        latitude=target.position.latitude if target.position else None,
        longitude=target.position.longitude if target.position else None,
        speed=target.speed_over_ground,
        course=target.course_over_ground,
        heading=target.heading,
        navigation_status=status.value if status is not None else None,
        navigation_status_text=status.display_text if status is not None else None,
        created_at=target.created_at,
        updated_at=target.updated_at,
    )


@router.get("/state", response_model=NavigationStateResponse)
async def get_state(
    decoder: NMEADecoder = Depends(require_decoder),
) -> NavigationStateResponse:
    """Get the current navigation state."""
    state = decoder.state
    return NavigationStateResponse(
        draft=state.draft.value if state.draft is not None else None,
        draft_feet=state.draft.in_feet.value if state.draft is not None else None,
        heading_magnetic=state.heading_magnetic,
        heading_true=state.heading_true,
        latitude=state.position.latitude if state.position else None,
        longitude=state.position.longitude if state.position else None,
        position_text=str(state.position) if state.position else None,
        ais_target_count=len(state.ais) if state.ais is not None else 0,
    )


@router.get("/targets", response_model=AISTargetListResponse)
async def list_targets(
    decoder: NMEADecoder = Depends(require_decoder),
    named_only: bool = Query(False, description="Only targets with a known name"),
) -> AISTargetListResponse:
    """List tracked AIS targets, most recently updated first."""
    targets = list(decoder.state.ais) if decoder.state.ais is not None else []
    if named_only:
        targets = [t for t in targets if t.name]
    targets.sort(key=lambda t: t.updated_at, reverse=True)

    return AISTargetListResponse(
        targets=[_target_response(t) for t in targets],
        total=len(targets),
    )


@router.get("/targets/{mmsi}", response_model=AISTargetResponse)
async def get_target(
    mmsi: int,
    decoder: NMEADecoder = Depends(require_decoder),
) -> AISTargetResponse:
    """Get a single AIS target by MMSI."""
    ais = decoder.state.ais
    target = ais.get(mmsi) if ais is not None else None
    if target is None:
        raise HTTPException(status_code=404, detail=f"AIS target {mmsi} not found")
    return _target_response(target)


@router.get("/log", response_model=LogResponse)
async def get_log(
    decoder: NMEADecoder = Depends(require_decoder),
    limit: int = Query(100, description="Maximum number of entries", ge=1, le=5000),
) -> LogResponse:
    """Get the most recent diagnostic log entries."""
    return LogResponse(entries=decoder.log.tail(limit), total=len(decoder.log))


@router.get("/log/export", response_class=PlainTextResponse)
async def export_log(
    decoder: NMEADecoder = Depends(require_decoder),
) -> PlainTextResponse:
    """Download the whole diagnostic log as nmea.log."""
    return PlainTextResponse(
        decoder.log.export(),
        headers={"Content-Disposition": 'attachment; filename="nmea.log"'},
    )

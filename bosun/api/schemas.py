"""Pydantic response schemas for API v1 endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NavigationStateResponse(BaseModel):
    """Current vessel state.

    Example:
        {
            "draft": 4.06,
            "draft_feet": 13.32,
            "heading_magnetic": 185.2,
            "heading_true": 197.9,
            "latitude": 37.453498,
            "longitude": -122.182354,
            "position_text": "37.45°N 122.18°W",
            "ais_target_count": 12
        }
    """

    draft: Optional[float] = Field(None, description="Depth below transducer (meters)")
    draft_feet: Optional[float] = Field(None, description="Depth below transducer (feet)")
    heading_magnetic: Optional[float] = Field(None, description="Magnetic heading (degrees)")
    heading_true: Optional[float] = Field(None, description="True heading (degrees)")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude in degrees")
    position_text: Optional[str] = Field(None, description="Position for display")
    ais_target_count: int = Field(0, description="Number of tracked AIS targets")


class AISTargetResponse(BaseModel):
    """AIS target details."""

    mmsi: str = Field(..., description="Maritime Mobile Service Identity (9 digits)")
    name: Optional[str] = Field(None, description="Vessel name")
    call_sign: Optional[str] = Field(None, description="Radio call sign")
    ship_type: Optional[int] = Field(None, description="AIS ship type code")
    ship_type_text: Optional[str] = Field(None, description="Human-readable ship type")
    latitude: Optional[float] = Field(None, description="Last reported latitude")
    longitude: Optional[float] = Field(None, description="Last reported longitude")
    speed: Optional[float] = Field(None, description="Speed over ground (knots)")
    course: Optional[float] = Field(None, description="Course over ground (degrees)")
    heading: Optional[int] = Field(None, description="True heading (degrees, 511 = n/a)")
    navigation_status: Optional[int] = Field(None, ge=0, le=15, description="AIS navigation status code")
    navigation_status_text: Optional[str] = Field(None, description="Human-readable navigation status")
    created_at: datetime = Field(..., description="First sighting (ISO 8601)")
    updated_at: datetime = Field(..., description="Last report (ISO 8601)")


class AISTargetListResponse(BaseModel):
    """List of AIS targets."""

    targets: list[AISTargetResponse] = Field(..., description="Tracked targets")
    total: int = Field(..., description="Number of tracked targets")


class LogResponse(BaseModel):
    """Most recent diagnostic log entries, oldest first."""

    entries: list[str] = Field(..., description="Log lines")
    total: int = Field(..., description="Number of entries held")

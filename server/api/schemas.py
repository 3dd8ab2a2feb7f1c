"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field
from typing import Dict, Optional


class MapReverseGeocodeDto(BaseModel):
    """Query parameters for the reverse geocoding endpoint."""
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class MapReverseGeocodeResponse(BaseModel):
    """One place in the reverse geocoding response."""
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None


class RootResponse(BaseModel):
    """Response model for the root endpoint."""
    name: str
    status: str
    version: str
    description: str
    nominatim_configured: bool
    endpoints: Dict[str, str]

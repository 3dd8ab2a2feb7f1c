"""Pydantic models shared by the reverse geocoding services."""

from typing import Dict, Optional, Union

from pydantic import BaseModel, Field


class GeoPoint(BaseModel):
    """A WGS84 coordinate."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class ReverseGeocodeResult(BaseModel):
    """Human-readable place description for a coordinate."""
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None


class NominatimPlace(BaseModel):
    """Subset of a Nominatim /reverse reply, independent of the wire format."""
    place_id: Optional[Union[int, str]] = None
    lat: Optional[str] = None
    lon: Optional[str] = None
    display_name: Optional[str] = None
    place_rank: Optional[Union[int, float, str]] = None
    error: Optional[str] = None
    address: Dict[str, str] = Field(default_factory=dict)

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


# GeoJSON Point for place location (2dsphere index)
class GeoJSONPoint(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float]  # [longitude, latitude]

    @classmethod
    def from_lat_lon(cls, latitude: float, longitude: float) -> "GeoJSONPoint":
        return cls(coordinates=[longitude, latitude])


class GeoJSONGeometry(BaseModel):
    """Country outline: Polygon or MultiPolygon."""

    type: Literal["Polygon", "MultiPolygon"]
    coordinates: List[Any]


class GeodataPlace(BaseModel):
    """A populated place (GeoNames cities500 row) in geodata_places."""

    geoname_id: int
    name: str
    country_code: str
    admin1_code: Optional[str] = None
    admin1_name: Optional[str] = None
    admin2_name: Optional[str] = None
    alternate_names: Optional[str] = None
    location: GeoJSONPoint


class NaturalEarthCountry(BaseModel):
    """A country outline (Natural Earth admin 0) in naturalearth_countries."""

    admin: str
    admin_a3: str
    geometry: GeoJSONGeometry


class GeodataImportMeta(BaseModel):
    """Bookkeeping document written after a geodata import."""

    key: Literal["geodata"] = "geodata"
    places: int = 0
    countries: int = 0
    imported_at: Optional[str] = Field(default=None, description="ISO timestamp of the import")

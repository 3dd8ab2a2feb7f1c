"""Reverse geocoding: Nominatim client, address mapping and local fallback."""

from .models import GeoPoint, ReverseGeocodeResult, NominatimPlace
from .nominatim_service import NominatimService
from .hybrid_service import HybridReverseGeocodeService

__all__ = [
    "GeoPoint",
    "ReverseGeocodeResult",
    "NominatimPlace",
    "NominatimService",
    "HybridReverseGeocodeService",
]

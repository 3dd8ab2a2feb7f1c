"""Services package"""

from .geocoding import HybridReverseGeocodeService, NominatimService
from .map_service import MapService

__all__ = [
    "HybridReverseGeocodeService",
    "NominatimService",
    "MapService",
]

"""
Map service - reverse geocoding entry point used by the HTTP API.
Asks Nominatim when it is configured, then the local geodata repository.
"""
import logging
from typing import List

from services.geocoding.hybrid_service import HybridReverseGeocodeService
from services.geocoding.models import GeoPoint, ReverseGeocodeResult

logger = logging.getLogger(__name__)


class MapService:
    """Reverse geocoding for API callers."""

    def __init__(self, reverse_geocoder: HybridReverseGeocodeService):
        self.reverse_geocoder = reverse_geocoder

    @property
    def nominatim_configured(self) -> bool:
        return self.reverse_geocoder.nominatim_service.is_configured

    async def reverse_geocode(self, latitude: float, longitude: float) -> List[ReverseGeocodeResult]:
        """
        Resolve a coordinate to at most one place.

        Returns:
            [result] from Nominatim or the local database, or [] when neither knows the place.
        """
        point = GeoPoint(latitude=latitude, longitude=longitude)
        result = await self.reverse_geocoder.reverse_geocode(point)
        if result is None:
            logger.info(f"No place found for {latitude},{longitude}")
            return []
        return [result]

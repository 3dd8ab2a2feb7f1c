"""Nominatim first, local geodata database second."""

import logging
from typing import TYPE_CHECKING, Optional

from .models import GeoPoint, ReverseGeocodeResult
from .nominatim_service import NominatimService

if TYPE_CHECKING:
    from db.map_repository import MapRepository

logger = logging.getLogger(__name__)


class HybridReverseGeocodeService:
    """Reverse geocoding that falls back to the local map repository."""

    def __init__(self, map_repository: "MapRepository", nominatim_service: NominatimService):
        self.map_repository = map_repository
        self.nominatim_service = nominatim_service

    async def reverse_geocode(self, point: GeoPoint) -> Optional[ReverseGeocodeResult]:
        result = await self.nominatim_service.reverse_geocode(point)

        if result is None:
            logger.debug(f"Falling back to local geodata for {point.latitude},{point.longitude}")
            result = await self.map_repository.reverse_geocode(point)

        return result

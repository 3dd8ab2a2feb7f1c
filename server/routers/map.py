"""Map routes: reverse geocoding of a coordinate."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_map_service
from api.schemas import MapReverseGeocodeDto, MapReverseGeocodeResponse
from services.map_service import MapService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/map", tags=["map"])


@router.get("/reverse-geocode", response_model=List[MapReverseGeocodeResponse])
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    map_service: MapService = Depends(get_map_service),
) -> List[MapReverseGeocodeResponse]:
    """
    Resolve a coordinate to country, state and city.

    Returns a list with one place, or an empty list when the coordinate
    could not be resolved.
    """
    dto = MapReverseGeocodeDto(lat=lat, lon=lon)
    try:
        results = await map_service.reverse_geocode(dto.lat, dto.lon)
    except Exception as e:
        logger.error(f"Error reverse geocoding {dto.lat},{dto.lon}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return [MapReverseGeocodeResponse(**result.model_dump()) for result in results]

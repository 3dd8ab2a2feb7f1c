"""
Local reverse geocoding against the geodata collections.

geodata_places holds GeoNames populated places, naturalearth_countries
holds country outlines. Both carry 2dsphere indexes (see db/indexes.py).
"""
import logging
from typing import Any, Dict, Optional

import pycountry
from motor.motor_asyncio import AsyncIOMotorDatabase

from db.indexes import create_indexes
from modules.config import ConfigEnv
from services.geocoding.models import GeoPoint, ReverseGeocodeResult

logger = logging.getLogger(__name__)


def country_name_from_code(code: Optional[str]) -> Optional[str]:
    """Return the English country name for an ISO 3166-1 alpha-2 or alpha-3 code."""
    if not code:
        return None
    code = code.strip().upper()
    try:
        if len(code) == 2:
            country = pycountry.countries.get(alpha_2=code)
        elif len(code) == 3:
            country = pycountry.countries.get(alpha_3=code)
        else:
            return None
    except (KeyError, LookupError):
        return None
    if country is None:
        return None
    return getattr(country, "common_name", None) or country.name


def _geometry(point: GeoPoint) -> Dict[str, Any]:
    return {"type": "Point", "coordinates": [point.longitude, point.latitude]}


class MapRepository:
    """Reverse geocoding from the local MongoDB geodata."""

    def __init__(self, db: AsyncIOMotorDatabase, max_distance_m: Optional[int] = None):
        self.db = db
        self.max_distance_m = max_distance_m or ConfigEnv.REVERSE_GEOCODE_MAX_DISTANCE_M

    async def ensure_indexes(self) -> None:
        await create_indexes(self.db)

    async def reverse_geocode(self, point: GeoPoint) -> Optional[ReverseGeocodeResult]:
        """
        Nearest populated place within max_distance_m, else the country
        whose outline contains the point, else None.
        """
        place = await self.db.geodata_places.find_one(
            {
                "location": {
                    "$nearSphere": {
                        "$geometry": _geometry(point),
                        "$maxDistance": self.max_distance_m,
                    }
                }
            },
            {"_id": 0, "name": 1, "country_code": 1, "admin1_name": 1},
        )
        if place:
            return ReverseGeocodeResult(
                country=country_name_from_code(place.get("country_code")),
                state=place.get("admin1_name"),
                city=place.get("name"),
            )

        logger.warning(
            f"Response from database for reverse geocoding latitude: {point.latitude}, "
            f"longitude: {point.longitude} was null"
        )

        country = await self.db.naturalearth_countries.find_one(
            {"geometry": {"$geoIntersects": {"$geometry": _geometry(point)}}},
            {"_id": 0, "admin": 1, "admin_a3": 1},
        )
        if not country:
            logger.warning(
                f"Response from database for natural earth reverse geocoding latitude: {point.latitude}, "
                f"longitude: {point.longitude} was null"
            )
            return None

        name = country_name_from_code(country.get("admin_a3")) or country.get("admin")
        return ReverseGeocodeResult(country=name, state=None, city=None)

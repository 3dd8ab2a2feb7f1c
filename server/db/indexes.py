"""Create MongoDB indexes for the geodata collections."""

import logging
from typing import Any, List, Tuple

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def _key_spec_matches(existing_key: List[Tuple[str, Any]], wanted_key: List[Tuple[str, Any]]) -> bool:
    """Return True if existing index key matches wanted key (order and direction)."""
    if len(existing_key) != len(wanted_key):
        return False
    return all(
        ek[0] == wk[0] and ek[1] == wk[1]
        for ek, wk in zip(existing_key, wanted_key)
    )


async def _index_with_spec_exists(
    coll: AsyncIOMotorCollection,
    keys: List[Tuple[str, Any]],
    *,
    unique: bool = False,
) -> bool:
    """
    Return True if an index with the same key (and unique option) already exists.
    Checks by key/spec so we skip creation when MongoDB has an index under a different name.
    """
    try:
        info = await coll.index_information()
    except Exception:
        return False
    for name, spec in info.items():
        if name == "_id_":
            continue
        existing_key = spec.get("key")
        if not existing_key:
            continue
        # index_information() returns key as list of (name, direction) e.g. [("user_id", 1)]
        key_list = list(existing_key.items()) if hasattr(existing_key, "items") else existing_key
        if not _key_spec_matches(key_list, keys):
            continue
        existing_unique = spec.get("unique", False)
        if existing_unique == unique:
            return True
    return False


async def _ensure_index(
    coll: AsyncIOMotorCollection,
    keys: List[Tuple[str, Any]],
    *,
    unique: bool = False,
    name: str,
) -> bool:
    """
    Create index only if one with the same key (and unique) does not exist.
    Return True if created, False if already existed (by any name).
    """
    if await _index_with_spec_exists(coll, keys, unique=unique):
        return False
    await coll.create_index(keys, unique=unique, name=name)
    return True


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create indexes on the geodata collections. Only creates when missing.
    Logs only when an index is actually created; ends with "Indexes ensured".
    """
    total_created = 0

    # geodata_places: unique on geoname_id; 2dsphere on location for nearest-place queries
    c = 0
    if await _ensure_index(db.geodata_places, [("geoname_id", 1)], unique=True, name="geoname_id_unique"):
        c += 1
        total_created += 1
    if await _ensure_index(db.geodata_places, [("location", "2dsphere")], name="location_2dsphere"):
        c += 1
        total_created += 1
    if c:
        logger.info("Indexes geodata_places.* created")

    # naturalearth_countries: 2dsphere on geometry for point-in-country queries
    if await _ensure_index(db.naturalearth_countries, [("geometry", "2dsphere")], name="geometry_2dsphere"):
        total_created += 1
        logger.info("Index naturalearth_countries.geometry created")

    logger.info("Indexes ensured for geodata collections (%s created this run)", total_created)

"""
Import the local reverse geocoding data into MongoDB.

Sources (downloaded into server/geodata/ by default):
- cities500.txt           GeoNames populated places      -> geodata_places
- admin1CodesASCII.txt    GeoNames first-level names     -> geodata_places.admin1_name
- admin2Codes.txt         GeoNames second-level names    -> geodata_places.admin2_name
- ne_10m_admin_0_countries.geojson  Natural Earth outlines -> naturalearth_countries

Usage:
  uv run python -m scripts.import_geodata
  uv run python -m scripts.import_geodata --drop                # drop collections before insert
  uv run python -m scripts.import_geodata --data-dir /tmp/geo
"""

import argparse
import asyncio
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

load_dotenv()

# Add server root to path so we can import db
SERVER_ROOT = Path(__file__).resolve().parent.parent
os.chdir(SERVER_ROOT)

from db.connection import DB_NAME
from db.indexes import create_indexes
from db.schemas import GeodataImportMeta, GeodataPlace, GeoJSONPoint, NaturalEarthCountry
from modules.config import ConfigEnv

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = SERVER_ROOT / "geodata"
CITIES_FILE = "cities500.txt"
ADMIN1_FILE = "admin1CodesASCII.txt"
ADMIN2_FILE = "admin2Codes.txt"
COUNTRIES_FILE = "ne_10m_admin_0_countries.geojson"
BATCH_SIZE = 5000


def load_admin_names(path: Path) -> Dict[str, str]:
    """admin1CodesASCII / admin2Codes -> {"US.CA": "California", ...}."""
    names: Dict[str, str] = {}
    if not path.exists():
        logger.warning("%s not found, admin names will be empty", path.name)
        return names
    with path.open(encoding="utf-8") as f:
        for line in f:
            cols = line.rstrip("\n").split("\t")
            if len(cols) < 2 or not cols[0]:
                continue
            names[cols[0]] = cols[1]
    return names


def parse_cities_line(
    line: str,
    admin1: Dict[str, str],
    admin2: Dict[str, str],
) -> Optional[GeodataPlace]:
    """One cities500.txt row -> GeodataPlace, or None for a malformed row."""
    cols = line.rstrip("\n").split("\t")
    if len(cols) < 12:
        return None
    try:
        geoname_id = int(cols[0])
        latitude = float(cols[4])
        longitude = float(cols[5])
    except ValueError:
        return None

    country_code = cols[8]
    admin1_code = cols[10] or None
    admin2_code = cols[11] or None
    admin1_key = f"{country_code}.{admin1_code}" if admin1_code else None
    admin2_key = f"{country_code}.{admin1_code}.{admin2_code}" if admin1_code and admin2_code else None

    return GeodataPlace(
        geoname_id=geoname_id,
        name=cols[1],
        country_code=country_code,
        admin1_code=admin1_code,
        admin1_name=admin1.get(admin1_key) if admin1_key else None,
        admin2_name=admin2.get(admin2_key) if admin2_key else None,
        alternate_names=cols[3] or None,
        location=GeoJSONPoint.from_lat_lon(latitude, longitude),
    )


def iter_places(data_dir: Path) -> Iterator[GeodataPlace]:
    """Yield every parsable place in cities500.txt."""
    admin1 = load_admin_names(data_dir / ADMIN1_FILE)
    admin2 = load_admin_names(data_dir / ADMIN2_FILE)
    with (data_dir / CITIES_FILE).open(encoding="utf-8") as f:
        for line in f:
            place = parse_cities_line(line, admin1, admin2)
            if place is not None:
                yield place


def parse_countries(geojson: dict) -> List[NaturalEarthCountry]:
    """Natural Earth FeatureCollection -> NaturalEarthCountry list (features without polygons skipped)."""
    countries: List[NaturalEarthCountry] = []
    for feature in geojson.get("features", []):
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        if geometry.get("type") not in ("Polygon", "MultiPolygon"):
            continue
        admin = props.get("ADMIN") or props.get("admin")
        admin_a3 = props.get("ADM0_A3") or props.get("adm0_a3") or props.get("ISO_A3")
        if not admin or not admin_a3:
            continue
        countries.append(NaturalEarthCountry(admin=admin, admin_a3=admin_a3, geometry=geometry))
    return countries


async def import_places(db, data_dir: Path, drop: bool) -> int:
    """cities500.txt -> geodata_places."""
    if not (data_dir / CITIES_FILE).exists():
        logger.warning("%s not found, skipping geodata_places", CITIES_FILE)
        return 0
    if drop:
        await db.geodata_places.delete_many({})
    batch: List[dict] = []
    count = 0
    for place in iter_places(data_dir):
        batch.append(place.model_dump())
        if len(batch) >= BATCH_SIZE:
            await db.geodata_places.insert_many(batch)
            count += len(batch)
            logger.info("Inserted %d places so far", count)
            batch = []
    if batch:
        await db.geodata_places.insert_many(batch)
        count += len(batch)
    logger.info("Inserted %d places from %s", count, CITIES_FILE)
    return count


async def import_countries(db, data_dir: Path, drop: bool) -> int:
    """Natural Earth GeoJSON -> naturalearth_countries."""
    path = data_dir / COUNTRIES_FILE
    if not path.exists():
        logger.warning("%s not found, skipping naturalearth_countries", COUNTRIES_FILE)
        return 0
    if drop:
        await db.naturalearth_countries.delete_many({})
    with path.open(encoding="utf-8") as f:
        countries = parse_countries(json.load(f))
    if countries:
        await db.naturalearth_countries.insert_many([c.model_dump() for c in countries])
    logger.info("Inserted %d countries from %s", len(countries), COUNTRIES_FILE)
    return len(countries)


async def main(data_dir: Path, drop: bool) -> None:
    client = AsyncIOMotorClient(ConfigEnv.MONGODB_URL)
    db = client[DB_NAME]
    try:
        places = await import_places(db, data_dir, drop)
        countries = await import_countries(db, data_dir, drop)
        await create_indexes(db)
        meta = GeodataImportMeta(
            places=places,
            countries=countries,
            imported_at=datetime.now(timezone.utc).isoformat(),
        )
        await db.system_metadata.replace_one({"key": meta.key}, meta.model_dump(), upsert=True)
        logger.info("Geodata import complete: %d places, %d countries", places, countries)
    finally:
        client.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    parser = argparse.ArgumentParser(description="Import GeoNames and Natural Earth data into MongoDB")
    parser.add_argument("--data-dir", type=Path, default=DEFAULT_DATA_DIR, help="Directory holding the source files")
    parser.add_argument("--drop", action="store_true", help="Drop geodata collections before insert")
    args = parser.parse_args()
    asyncio.run(main(args.data_dir, args.drop))

"""
Address field selection for Nominatim replies.

Turns the open ``address`` mapping of a Nominatim reply into the
country / state / city triple. The mapping is heuristic because OSM
admin levels mean different things in different countries.
"""
import math
import re
from typing import Mapping, Optional, Sequence, Tuple

from .models import ReverseGeocodeResult

MIN_PLACE_RANK = 10

STATE_FALLBACK_KEYS = (
    "region",
    "state",
    "province",
    "state_district",
    "county",
    "municipality",
    "city_district",
    "district",
    "borough",
    "subregion",
    "subdivision",
)
CITY_STATE_STATE_KEYS = ("suburb", "quarter", "neighbourhood")
CITY_STATE_COUNTRIES = {"monaco", "singapore", "vatican city"}

POI_KEYS = ("amenity", "shop", "leisure", "tourism", "office", "building", "house_name")
SUB_LOCALITY_KEYS = ("neighbourhood", "quarter", "suburb")
SETTLEMENT_KEYS = ("village", "town", "city")
DISTRICT_KEYS = ("city_district", "borough", "district")

_ISO_KEY_RE = re.compile(r"^ISO3166-2-lvl(\d{1,2})$")

Address = Mapping[str, Optional[str]]


def to_int(value: object) -> Optional[int]:
    """Parse a place rank that may arrive as int, float or numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = re.match(r"^\s*([+-]?\d+)", value)
        return int(match.group(1)) if match else None
    return None


def pick_from_ordered(address: Address, keys: Sequence[str]) -> Optional[str]:
    """Return the first non-empty value among *keys*."""
    for key in keys:
        value = address.get(key)
        if value:
            return value
    return None


def pick_best_iso_subdivision(address: Address) -> Optional[Tuple[str, int]]:
    """
    Pick the largest administrative unit below country that has an ISO code.

    Scans ``ISO3166-2-lvlNN`` keys and returns ``(code, level)`` for the
    lowest level number above 2 (lower level = larger area).
    """
    best: Optional[Tuple[str, int]] = None
    for key, value in address.items():
        if not value:
            continue
        match = _ISO_KEY_RE.match(key)
        if not match:
            continue
        level = int(match.group(1))
        if level <= 2:
            continue
        if best is None or level < best[1]:
            best = (value, level)
    return best


def pick_name_for_iso_level(address: Address, level: int) -> Optional[str]:
    """Pick the human-readable name matching the granularity of an ISO level."""
    if level <= 4:
        return pick_from_ordered(address, ["region", "state", "province"])
    if level <= 6:
        return pick_from_ordered(address, ["state_district", "county", "district"])
    if level <= 8:
        return pick_from_ordered(address, ["municipality", "city", "town"])
    # 9-12: city districts, suburbs, quarters, neighbourhoods
    return pick_from_ordered(address, ["city_district", "borough", "suburb", "quarter", "neighbourhood"])


def is_city_state(address: Address) -> bool:
    """Monaco, Singapore, Vatican City: the city is the country."""
    country = (address.get("country") or "").strip().lower()
    city = (address.get("city") or "").strip().lower()
    if not country or not city:
        return False
    return city == country or country in CITY_STATE_COUNTRIES


def pick_state_name(address: Address, iso: Optional[Tuple[str, int]] = None) -> Optional[str]:
    """State name without the ISO code suffix."""
    name = None
    if iso:
        name = pick_name_for_iso_level(address, iso[1])
    if not name:
        name = pick_from_ordered(address, STATE_FALLBACK_KEYS)
    if not name and is_city_state(address):
        name = pick_from_ordered(address, CITY_STATE_STATE_KEYS)
    return name


def format_state(name: Optional[str], iso_code: Optional[str]) -> Optional[str]:
    """'Name (CODE)', or whichever half is present."""
    if name and iso_code:
        return f"{name} ({iso_code})"
    return name or iso_code or None


def _eq_ignore_case(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b:
        return False
    return a.strip().lower() == b.strip().lower()


def build_city_field(address: Address, state_name: Optional[str] = None) -> Optional[str]:
    """
    Build a compact, de-duplicated "city" string.

    Order: point of interest, house number, road, sub-locality,
    settlement, district (unless it repeats the state), postcode.
    Duplicates are dropped case-insensitively, first occurrence wins.
    """
    parts = [
        pick_from_ordered(address, POI_KEYS),
        address.get("house_number"),
        address.get("road"),
        pick_from_ordered(address, SUB_LOCALITY_KEYS),
        pick_from_ordered(address, SETTLEMENT_KEYS),
    ]

    district = pick_from_ordered(address, DISTRICT_KEYS)
    if district and not _eq_ignore_case(district, state_name):
        parts.append(district)

    parts.append(address.get("postcode"))

    seen = set()
    out = []
    for part in parts:
        if not part:
            continue
        text = part.strip()
        key = text.lower()
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(text)

    return ", ".join(out) if out else None


def map_address(address: Optional[Address]) -> ReverseGeocodeResult:
    """Map a Nominatim address mapping to country / state / city."""
    address = address or {}
    iso = pick_best_iso_subdivision(address)
    state_name = pick_state_name(address, iso)

    return ReverseGeocodeResult(
        country=address.get("country") or None,
        state=format_state(state_name, iso[0] if iso else None),
        city=build_city_field(address, state_name),
    )

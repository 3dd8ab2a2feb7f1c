"""Tests for the Nominatim address field selection."""

from services.geocoding.address_mapping import (
    build_city_field,
    format_state,
    is_city_state,
    map_address,
    pick_best_iso_subdivision,
    pick_from_ordered,
    pick_name_for_iso_level,
    pick_state_name,
    to_int,
)


class TestToInt:
    def test_int(self):
        assert to_int(30) == 30

    def test_numeric_string(self):
        assert to_int("9") == 9

    def test_leading_digits(self):
        assert to_int("26abc") == 26

    def test_float(self):
        assert to_int(12.0) == 12

    def test_not_numeric(self):
        assert to_int("abc") is None
        assert to_int(None) is None
        assert to_int(float("nan")) is None
        assert to_int(True) is None


class TestIsoSubdivision:
    def test_lowest_level_above_country_wins(self):
        address = {
            "ISO3166-2-lvl6": "FR-75C",
            "ISO3166-2-lvl4": "FR-IDF",
        }
        assert pick_best_iso_subdivision(address) == ("FR-IDF", 4)

    def test_country_level_ignored(self):
        address = {"ISO3166-2-lvl2": "XX", "ISO3166-2-lvl10": "MC-FO"}
        assert pick_best_iso_subdivision(address) == ("MC-FO", 10)

    def test_empty_values_ignored(self):
        assert pick_best_iso_subdivision({"ISO3166-2-lvl4": ""}) is None

    def test_other_keys_ignored(self):
        assert pick_best_iso_subdivision({"ISO3166-1": "FR", "state": "Bavaria"}) is None


class TestNameForIsoLevel:
    address = {
        "region": "Region",
        "state": "State",
        "county": "County",
        "municipality": "Municipality",
        "city_district": "District",
    }

    def test_state_level(self):
        assert pick_name_for_iso_level(self.address, 4) == "Region"

    def test_county_level(self):
        assert pick_name_for_iso_level(self.address, 6) == "County"

    def test_municipality_level(self):
        assert pick_name_for_iso_level(self.address, 8) == "Municipality"

    def test_district_level(self):
        assert pick_name_for_iso_level(self.address, 10) == "District"

    def test_missing_name(self):
        assert pick_name_for_iso_level({"road": "x"}, 4) is None


class TestPickFromOrdered:
    def test_first_non_empty(self):
        assert pick_from_ordered({"a": "", "b": "B", "c": "C"}, ["a", "b", "c"]) == "B"

    def test_none(self):
        assert pick_from_ordered({}, ["a"]) is None


class TestCityState:
    def test_city_equals_country(self):
        assert is_city_state({"country": "Singapore", "city": "singapore"})

    def test_known_country(self):
        assert is_city_state({"country": "Vatican City", "city": "Città del Vaticano"})

    def test_needs_city(self):
        assert not is_city_state({"country": "Monaco"})

    def test_regular_country(self):
        assert not is_city_state({"country": "France", "city": "Paris"})


class TestState:
    def test_iso_name_with_code(self):
        address = {"state": "Bayern", "ISO3166-2-lvl4": "DE-BY", "country": "Deutschland"}
        assert map_address(address).state == "Bayern (DE-BY)"

    def test_iso_code_only(self):
        address = {"ISO3166-2-lvl4": "DE-BY", "road": "Leopoldstraße"}
        assert map_address(address).state == "DE-BY"

    def test_iso_level_without_name_uses_fallback_list(self):
        address = {"ISO3166-2-lvl8": "XX-01", "county": "Some County"}
        assert pick_state_name(address, ("XX-01", 8)) == "Some County"

    def test_fallback_order(self):
        address = {"county": "Kent", "state": "England"}
        assert map_address(address).state == "England"

    def test_region_before_state(self):
        address = {"region": "Metropolitan France", "state": "Île-de-France"}
        assert map_address(address).state == "Metropolitan France"

    def test_city_state_promotes_suburb(self):
        address = {"country": "Monaco", "city": "Monaco", "suburb": "Monte-Carlo"}
        assert map_address(address).state == "Monte-Carlo"

    def test_no_state(self):
        assert map_address({"country": "Nowhere", "road": "Main"}).state is None

    def test_format_state(self):
        assert format_state("Name", "CODE") == "Name (CODE)"
        assert format_state(None, "CODE") == "CODE"
        assert format_state("Name", None) == "Name"
        assert format_state(None, None) is None


class TestCityField:
    def test_fixed_order(self):
        address = {
            "postcode": "10117",
            "city": "Berlin",
            "road": "Pariser Platz",
            "house_number": "1",
            "tourism": "Brandenburger Tor",
            "suburb": "Mitte",
        }
        assert build_city_field(address) == "Brandenburger Tor, 1, Pariser Platz, Mitte, Berlin, 10117"

    def test_dedupe_case_insensitive_keeps_first(self):
        address = {"road": "Main Street", "suburb": "main street", "city": "Springfield"}
        assert build_city_field(address) == "Main Street, Springfield"

    def test_parts_trimmed(self):
        assert build_city_field({"road": "  High Street ", "town": "Bath"}) == "High Street, Bath"

    def test_district_same_as_state_skipped(self):
        address = {"city": "Springfield", "district": "Greene"}
        assert build_city_field(address, state_name="greene") == "Springfield"

    def test_district_distinct_from_state_kept(self):
        address = {"city": "London", "borough": "Camden"}
        assert build_city_field(address, state_name="England") == "London, Camden"

    def test_empty(self):
        assert build_city_field({"country": "France"}) is None


class TestMapAddress:
    def test_monaco(self):
        address = {
            "amenity": "Princesse Grace",
            "road": "Tunnel Pont Cadre",
            "suburb": "Fontvieille",
            "city": "Monaco",
            "postcode": "98020",
            "country": "Monaco",
            "country_code": "mc",
        }
        result = map_address(address)
        assert result.country == "Monaco"
        assert result.state == "Fontvieille"
        assert result.city == "Princesse Grace, Tunnel Pont Cadre, Fontvieille, Monaco, 98020"

    def test_empty_address(self):
        result = map_address({})
        assert result.country is None
        assert result.state is None
        assert result.city is None

    def test_none_address(self):
        assert map_address(None).model_dump() == {"country": None, "state": None, "city": None}

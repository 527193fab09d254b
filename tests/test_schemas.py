"""
Travel Sample API — Schema Validation Tests
=============================================

What we test:
    ✅ Valid payloads normalize to their stored form (unset optionals dropped)
    ✅ Every missing required field is reported, not just the first
    ✅ Nested violations carry dotted paths (geo.lat, schedule.0.day)
    ✅ Numeric fields reject non-numeric strings
    ✅ Range and format constraints on route fields
"""

import pytest

from app.exceptions import ValidationError
from app.schemas.airline import Airline
from app.schemas.airport import Airport
from app.schemas.common import format_location, normalize, validate_payload
from app.schemas.hotel import HotelFilter
from app.schemas.route import Route


def fields_of(exc_info):
    return [violation["field"] for violation in exc_info.value.errors]


class TestAirlineSchema:
    def test_valid_payload_round_trips(self, sample_airline):
        airline = validate_payload(Airline, sample_airline)
        assert normalize(airline) == sample_airline

    def test_unknown_fields_are_dropped(self, sample_airline):
        airline = validate_payload(Airline, {**sample_airline, "unexpected": True})
        assert "unexpected" not in normalize(airline)

    def test_id_and_type_are_optional_but_kept(self, sample_airline):
        airline = validate_payload(Airline, {**sample_airline, "id": 10, "type": "airline"})
        assert normalize(airline)["id"] == 10
        assert normalize(airline)["type"] == "airline"

    def test_all_missing_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Airline, {"invalid": "data"})

        assert exc_info.value.message == "Invalid request body"
        assert set(fields_of(exc_info)) == {"callsign", "country", "iata", "icao", "name"}

    def test_wrong_type_rejected(self, sample_airline):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Airline, {**sample_airline, "name": 42})
        assert fields_of(exc_info) == ["name"]

    def test_non_object_body_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Airline, ["not", "an", "object"])
        assert len(exc_info.value.errors) == 1


class TestAirportSchema:
    def test_geo_is_optional(self, sample_airport):
        del sample_airport["geo"]
        airport = validate_payload(Airport, sample_airport)
        assert "geo" not in normalize(airport)

    def test_partial_geo_reports_nested_paths(self, sample_airport):
        sample_airport["geo"] = {"lat": 1.0}
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Airport, sample_airport)
        assert set(fields_of(exc_info)) == {"geo.lon", "geo.alt"}

    def test_non_numeric_coordinate_rejected(self, sample_airport):
        sample_airport["geo"]["lat"] = "north"
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Airport, sample_airport)
        assert fields_of(exc_info) == ["geo.lat"]

    def test_missing_required_and_nested_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Airport, {"geo": {"lat": "x", "lon": 1, "alt": 2}})
        assert set(fields_of(exc_info)) == {"city", "country", "faa", "geo.lat"}

    @pytest.mark.parametrize("value", ["NaN", "Infinity", float("nan"), float("inf")])
    def test_non_finite_coordinate_rejected(self, sample_airport, value):
        sample_airport["geo"]["lat"] = value
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Airport, sample_airport)
        assert fields_of(exc_info) == ["geo.lat"]

    def test_integer_coordinates_accepted(self, sample_airport):
        sample_airport["geo"] = {"lat": 50, "lon": 2, "alt": 12}
        airport = validate_payload(Airport, sample_airport)
        assert normalize(airport)["geo"] == {"lat": 50.0, "lon": 2.0, "alt": 12.0}


class TestRouteSchema:
    def test_valid_payload_round_trips(self, sample_route):
        route = validate_payload(Route, sample_route)
        assert normalize(route) == sample_route

    def test_negative_stops_and_distance_rejected(self, sample_route):
        sample_route["stops"] = -1
        sample_route["distance"] = -5.0
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Route, sample_route)
        assert set(fields_of(exc_info)) == {"stops", "distance"}

    @pytest.mark.parametrize("value", ["NaN", "Infinity", float("nan"), float("inf")])
    def test_non_finite_distance_rejected(self, sample_route, value):
        sample_route["distance"] = value
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Route, sample_route)
        assert fields_of(exc_info) == ["distance"]

    def test_booleans_are_not_numbers(self, sample_route):
        sample_route["stops"] = False
        sample_route["distance"] = True
        sample_route["schedule"][0]["day"] = True
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Route, sample_route)
        assert set(fields_of(exc_info)) == {"stops", "distance", "schedule.0.day"}

    def test_schedule_entries_validated_with_index(self, sample_route):
        sample_route["schedule"][1] = {"day": 7, "utc": "25:00:00", "flight": "AF547"}
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Route, sample_route)
        assert set(fields_of(exc_info)) == {"schedule.1.day", "schedule.1.utc"}

    def test_empty_body_lists_every_required_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(Route, {})
        assert len(set(fields_of(exc_info))) == 8


class TestHotelFilter:
    def test_present_keeps_only_supplied_fields(self):
        filters = HotelFilter(city="San Francisco", state="California", name="")
        assert filters.present() == [("city", "San Francisco"), ("state", "California")]

    def test_no_filters(self):
        assert HotelFilter().present() == []


def test_format_location_drops_body_marker():
    assert format_location(("body", "geo", "lat")) == "geo.lat"
    assert format_location(("body",)) == "body"
    assert format_location(("schedule", 0, "day")) == "schedule.0.day"

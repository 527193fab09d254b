"""
Travel Sample API — Query Service Unit Tests
==============================================

What we test:
    ✅ Lenient limit/offset coercion (defaults on garbage, no 400)
    ✅ Required filters checked before any store access
    ✅ Filters bound as named parameters, never interpolated
    ✅ Result sets never exceed the requested limit
    ✅ Hotel full-text query construction (prefix, conjunction, match-all)
    ✅ Store failures become DatabaseError with the handler's generic message
"""

from unittest.mock import patch

import pytest
from couchbase.search import ConjunctionQuery, MatchAllQuery

from app.exceptions import DatabaseError, MissingFilterError
from app.schemas.hotel import HotelFilter
from app.services.query_service import (
    build_hotel_filter_query,
    coerce_int,
    hotel_fields,
    parse_pagination,
    query_service,
)


class TestPagination:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 10),
            ("5", 5),
            (" 7 ", 7),
            ("0", 0),
            ("ten", 10),
            ("2.5", 10),
            ("-3", 10),
            ("", 10),
        ],
    )
    def test_coerce_int(self, raw, expected):
        assert coerce_int(raw, 10) == expected

    def test_defaults(self):
        assert parse_pagination(None, None) == (10, 0)

    def test_non_numeric_falls_back(self):
        assert parse_pagination("abc", "xyz") == (10, 0)


class TestAirlineQueries:
    @pytest.mark.asyncio
    async def test_list_without_country_has_no_filter(self, fake_store):
        await query_service.list_airlines(fake_store)

        statement, params = fake_store.queries[0]
        assert "WHERE" not in statement
        assert params == {"LIMIT": 10, "OFFSET": 0}

    @pytest.mark.asyncio
    async def test_list_with_country_binds_parameter(self, fake_store):
        await query_service.list_airlines(fake_store, country="France", limit="5", offset="20")

        statement, params = fake_store.queries[0]
        assert "air.country = $COUNTRY" in statement
        assert "France" not in statement
        assert params == {"COUNTRY": "France", "LIMIT": 5, "OFFSET": 20}

    @pytest.mark.asyncio
    async def test_rows_truncated_to_limit(self, fake_store):
        fake_store.query_rows = [{"name": f"Airline {i}"} for i in range(8)]
        rows = await query_service.list_airlines(fake_store, limit="3")
        assert len(rows) == 3

    @pytest.mark.asyncio
    async def test_to_airport_requires_code(self, raising_store):
        with pytest.raises(MissingFilterError) as exc_info:
            await query_service.airlines_to_airport(raising_store, None)
        assert exc_info.value.message == "Destination airport code is required"

    @pytest.mark.asyncio
    async def test_to_airport_empty_code_rejected(self, raising_store):
        with pytest.raises(MissingFilterError):
            await query_service.airlines_to_airport(raising_store, "")

    @pytest.mark.asyncio
    async def test_to_airport_single_join_query(self, fake_store):
        fake_store.query_rows = [
            {"callsign": "AMERICAN", "country": "United States", "iata": "AA",
             "icao": "AAL", "id": 24, "name": "American Airlines", "type": "airline"},
        ]
        rows = await query_service.airlines_to_airport(fake_store, "JFK", limit="10", offset="0")

        assert rows == fake_store.query_rows
        assert len(fake_store.queries) == 1
        statement, params = fake_store.queries[0]
        assert "JOIN airline" in statement
        assert params == {"AIRPORT": "JFK", "LIMIT": 10, "OFFSET": 0}

    @pytest.mark.asyncio
    async def test_to_airport_store_failure(self, fake_store):
        fake_store.fail = True
        with pytest.raises(DatabaseError) as exc_info:
            await query_service.airlines_to_airport(fake_store, "JFK")
        assert exc_info.value.message == "Failed to fetch airlines"


class TestAirportQueries:
    @pytest.mark.asyncio
    async def test_direct_connections_returns_codes(self, fake_store):
        fake_store.query_rows = [
            {"destinationairport": "ATL"},
            {"destinationairport": "BOS"},
        ]
        codes = await query_service.direct_connections(fake_store, "SFO")

        assert codes == ["ATL", "BOS"]
        statement, params = fake_store.queries[0]
        assert "route.stops = 0" in statement
        assert params["AIRPORT"] == "SFO"

    @pytest.mark.asyncio
    async def test_direct_connections_requires_code(self, raising_store):
        with pytest.raises(MissingFilterError):
            await query_service.direct_connections(raising_store, None)

    @pytest.mark.asyncio
    async def test_list_airports_by_country(self, fake_store):
        await query_service.list_airports(fake_store, country="United Kingdom")
        statement, params = fake_store.queries[0]
        assert "ap.country = $COUNTRY" in statement
        assert params["COUNTRY"] == "United Kingdom"


class TestRouteQueries:
    @pytest.mark.asyncio
    async def test_both_filters(self, fake_store):
        await query_service.list_routes(
            fake_store, source_airport_code="TLV", destination_airport_code="MRS"
        )
        statement, params = fake_store.queries[0]
        assert "r.sourceairport = $SOURCE AND r.destinationairport = $DESTINATION" in statement
        assert params["SOURCE"] == "TLV"
        assert params["DESTINATION"] == "MRS"

    @pytest.mark.asyncio
    async def test_no_filters(self, fake_store):
        await query_service.list_routes(fake_store)
        statement, _ = fake_store.queries[0]
        assert "WHERE" not in statement


class TestHotelQueries:
    @pytest.mark.asyncio
    async def test_search_requires_name(self, raising_store):
        with pytest.raises(MissingFilterError) as exc_info:
            await query_service.search_hotels(raising_store, None)
        assert exc_info.value.message == "Name query parameter is required"

    @pytest.mark.asyncio
    async def test_search_uses_lowercase_prefix(self, fake_store):
        fake_store.search_rows = [
            {"id": "hotel_1", "fields": {"name": "Seal Rock Inn", "city": "San Francisco"}},
        ]
        with patch("app.services.query_service.PrefixQuery") as prefix_query:
            hotels = await query_service.search_hotels(fake_store, "SEAL", limit="5", offset="1")

        prefix_query.assert_called_once_with("seal", field="name")
        assert hotels == [{"name": "Seal Rock Inn", "city": "San Francisco"}]
        search = fake_store.searches[0]
        assert search["index"] == "hotel_search"
        assert (search["limit"], search["skip"]) == (5, 1)

    @pytest.mark.asyncio
    async def test_filter_shapes_rows(self, fake_store):
        fake_store.search_rows = [
            {"id": "hotel_26223", "fields": {
                "name": "Hotel Vitale", "city": "San Francisco", "state": "California",
                "country": "United States", "free_parking": False,
            }},
        ]
        hotels = await query_service.filter_hotels(fake_store, HotelFilter(city="San Francisco"))

        assert hotels == [{
            "id": "hotel_26223",
            "name": "Hotel Vitale",
            "title": None,
            "description": None,
            "country": "United States",
            "city": "San Francisco",
            "state": "California",
        }]

    @pytest.mark.asyncio
    async def test_filter_store_failure(self, fake_store):
        fake_store.fail = True
        with pytest.raises(DatabaseError):
            await query_service.filter_hotels(fake_store, HotelFilter())

    def test_no_filters_match_everything(self):
        assert isinstance(build_hotel_filter_query(HotelFilter()), MatchAllQuery)

    def test_filters_become_conjunction(self):
        query = build_hotel_filter_query(HotelFilter(country="United States", state="California"))
        assert isinstance(query, ConjunctionQuery)

    def test_conjunction_built_from_present_fields(self):
        with patch("app.services.query_service.MatchQuery") as match_query, \
             patch("app.services.query_service.ConjunctionQuery") as conjunction:
            build_hotel_filter_query(HotelFilter(country="United States", city="San Francisco"))

        assert [c.args for c in match_query.call_args_list] == [("United States",), ("San Francisco",)]
        assert [c.kwargs for c in match_query.call_args_list] == [{"field": "country"}, {"field": "city"}]
        conjunction.assert_called_once()

    def test_hotel_fields_drops_non_text(self):
        assert hotel_fields({"name": "A", "free_breakfast": True, "vacancy": "yes"}) == {"name": "A"}

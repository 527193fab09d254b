"""
Travel Sample API — Query Service (List, Join and Full-Text Reads)
====================================================================

What:  Read-only list/search/filter operations over the inventory scope.
Why:   Keeps query text and parameter binding out of the route handlers.
How:   Each operation turns a bounded set of optional filters into ONE
       parameterized SQL++ statement or ONE full-text search request; joins
       run inside the query engine, never in Python.
Who:   Called by the airline, airport, route and hotel routers.

Pagination:
    limit (default 10) and offset (default 0) arrive as raw query strings.
    Non-numeric or negative values fall back to the defaults instead of
    failing the request. Returned rows never exceed `limit`.

Required filters:
    Endpoints with a mandatory filter raise MissingFilterError before the
    store is touched.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from couchbase.search import ConjunctionQuery, MatchAllQuery, MatchQuery, PrefixQuery

from app.config import settings
from app.database import CouchbaseStore, StoreResult
from app.exceptions import DatabaseError, MissingFilterError
from app.schemas.hotel import Hotel, HotelFilter

logger = logging.getLogger(__name__)


def coerce_int(value: Optional[str], default: int) -> int:
    """Lenient integer parsing: anything that is not a non-negative int → default."""
    if value is None:
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def parse_pagination(limit: Optional[str], offset: Optional[str]) -> Tuple[int, int]:
    return (
        coerce_int(limit, settings.default_page_limit),
        coerce_int(offset, settings.default_page_offset),
    )


# ══════════════════════════════════════════════════════════════════════════
# SQL++ Statements
# ══════════════════════════════════════════════════════════════════════════

AIRLINE_PROJECTION = """
    SELECT air.callsign,
           air.country,
           air.iata,
           air.icao,
           air.id,
           air.name,
           air.type
"""

AIRLINE_LIST_QUERY = AIRLINE_PROJECTION + """
    FROM airline AS air
    {where}
    ORDER BY air.name
    LIMIT $LIMIT OFFSET $OFFSET
"""

# Distinct airlines with at least one route into $AIRPORT
AIRLINES_TO_AIRPORT_QUERY = AIRLINE_PROJECTION + """
    FROM (SELECT DISTINCT META(airline).id AS airlineId
          FROM route
          JOIN airline
          ON route.airlineid = META(airline).id
          WHERE route.destinationairport = $AIRPORT) AS subquery
    JOIN airline AS air
    ON META(air).id = subquery.airlineId
    ORDER BY air.name
    LIMIT $LIMIT OFFSET $OFFSET
"""

AIRPORT_LIST_QUERY = """
    SELECT ap.airportname,
           ap.city,
           ap.country,
           ap.faa,
           ap.geo,
           ap.icao,
           ap.id,
           ap.type,
           ap.tz
    FROM airport AS ap
    {where}
    ORDER BY ap.airportname
    LIMIT $LIMIT OFFSET $OFFSET
"""

# Non-stop destinations reachable from $AIRPORT
DIRECT_CONNECTIONS_QUERY = """
    SELECT DISTINCT route.destinationairport
    FROM airport AS airport
    JOIN route AS route ON route.sourceairport = airport.faa
    WHERE airport.faa = $AIRPORT AND route.stops = 0
    ORDER BY route.destinationairport
    LIMIT $LIMIT OFFSET $OFFSET
"""

ROUTE_LIST_QUERY = """
    SELECT r.airline,
           r.airlineid,
           r.sourceairport,
           r.destinationairport,
           r.stops,
           r.equipment,
           r.distance,
           r.id,
           r.type
    FROM route AS r
    {where}
    ORDER BY r.sourceairport, r.destinationairport, r.airline
    LIMIT $LIMIT OFFSET $OFFSET
"""


def build_where(conditions: List[str]) -> str:
    return "WHERE " + " AND ".join(conditions) if conditions else ""


class QueryService:
    """
    Stateless read operations. Every public method performs at most one
    store call and returns a JSON-serializable list.
    """

    async def _run(
        self,
        store: CouchbaseStore,
        statement: str,
        params: Dict[str, Any],
        failure_message: str,
    ) -> List[Dict[str, Any]]:
        result: StoreResult = await store.query(statement, params)
        if not result.ok:
            raise DatabaseError(message=failure_message, context={"store_error": result.error})
        return result.value[: params["LIMIT"]]

    # ── Airlines ──────────────────────────────────────────────────────────

    async def list_airlines(
        self,
        store: CouchbaseStore,
        country: Optional[str] = None,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        lim, off = parse_pagination(limit, offset)
        params: Dict[str, Any] = {"LIMIT": lim, "OFFSET": off}
        conditions = []
        if country:
            conditions.append("air.country = $COUNTRY")
            params["COUNTRY"] = country

        statement = AIRLINE_LIST_QUERY.format(where=build_where(conditions))
        return await self._run(
            store, statement, params, "An error occurred while fetching airlines"
        )

    async def airlines_to_airport(
        self,
        store: CouchbaseStore,
        destination_airport_code: Optional[str],
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        if not destination_airport_code:
            raise MissingFilterError("Destination airport code is required")

        lim, off = parse_pagination(limit, offset)
        params = {"AIRPORT": destination_airport_code, "LIMIT": lim, "OFFSET": off}
        return await self._run(store, AIRLINES_TO_AIRPORT_QUERY, params, "Failed to fetch airlines")

    # ── Airports ──────────────────────────────────────────────────────────

    async def list_airports(
        self,
        store: CouchbaseStore,
        country: Optional[str] = None,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        lim, off = parse_pagination(limit, offset)
        params: Dict[str, Any] = {"LIMIT": lim, "OFFSET": off}
        conditions = []
        if country:
            conditions.append("ap.country = $COUNTRY")
            params["COUNTRY"] = country

        statement = AIRPORT_LIST_QUERY.format(where=build_where(conditions))
        return await self._run(
            store, statement, params, "An error occurred while fetching airports"
        )

    async def direct_connections(
        self,
        store: CouchbaseStore,
        destination_airport_code: Optional[str],
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> List[str]:
        """
        FAA codes reachable without stops from the given airport.

        The parameter keeps its historical name (destinationAirportCode) even
        though it is the departure airport of the returned routes.
        """
        if not destination_airport_code:
            raise MissingFilterError("Destination airport code is required")

        lim, off = parse_pagination(limit, offset)
        params = {"AIRPORT": destination_airport_code, "LIMIT": lim, "OFFSET": off}
        rows = await self._run(
            store, DIRECT_CONNECTIONS_QUERY, params, "An error occurred while fetching connections"
        )
        return [row["destinationairport"] for row in rows if "destinationairport" in row]

    # ── Routes ────────────────────────────────────────────────────────────

    async def list_routes(
        self,
        store: CouchbaseStore,
        source_airport_code: Optional[str] = None,
        destination_airport_code: Optional[str] = None,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        lim, off = parse_pagination(limit, offset)
        params: Dict[str, Any] = {"LIMIT": lim, "OFFSET": off}
        conditions = []
        if source_airport_code:
            conditions.append("r.sourceairport = $SOURCE")
            params["SOURCE"] = source_airport_code
        if destination_airport_code:
            conditions.append("r.destinationairport = $DESTINATION")
            params["DESTINATION"] = destination_airport_code

        statement = ROUTE_LIST_QUERY.format(where=build_where(conditions))
        return await self._run(
            store, statement, params, "An error occurred while fetching routes"
        )

    # ── Hotels (Full-Text Search) ─────────────────────────────────────────

    async def search_hotels(
        self,
        store: CouchbaseStore,
        name: Optional[str],
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Prefix match on the hotel name.

        The index analyzes names to lower case, so the prefix is lowered too.
        Each result is the set of stored fields of the hit.
        """
        if not name:
            raise MissingFilterError("Name query parameter is required")

        lim, off = parse_pagination(limit, offset)
        query = PrefixQuery(name.lower(), field="name")
        result = await store.search(settings.search_index_name, query, limit=lim, skip=off)
        if not result.ok:
            raise DatabaseError(
                message="An error occurred while searching hotels",
                context={"store_error": result.error},
            )
        return [row["fields"] for row in result.value[:lim]]

    async def filter_hotels(
        self,
        store: CouchbaseStore,
        filters: HotelFilter,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Conjunction of match queries over whichever text fields were given.
        With no filters the query matches every hotel.
        """
        lim, off = parse_pagination(limit, offset)
        query = build_hotel_filter_query(filters)
        result = await store.search(settings.search_index_name, query, limit=lim, skip=off)
        if not result.ok:
            raise DatabaseError(
                message="An error occurred while filtering hotels",
                context={"store_error": result.error},
            )
        return [
            Hotel(id=row["id"], **hotel_fields(row["fields"])).model_dump()
            for row in result.value[:lim]
        ]


def build_hotel_filter_query(filters: HotelFilter):
    clauses = [MatchQuery(value, field=field) for field, value in filters.present()]
    if not clauses:
        return MatchAllQuery()
    return ConjunctionQuery(*clauses)


def hotel_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the text fields; non-string values are dropped."""
    return {
        key: value
        for key, value in fields.items()
        if key in HotelFilter.model_fields and isinstance(value, str)
    }


query_service = QueryService()

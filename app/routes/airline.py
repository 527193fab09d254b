"""
Travel Sample API — Airline Route Handlers
============================================

What:  CRUD on airline documents plus two read queries.
How:   Extracts path/query/body data, delegates to the document and query
       services, returns JSON. Errors are raised as application exceptions and
       shaped by the global handlers in main.py.

Endpoints:
    GET    /api/v1/airline/list          airlines, optionally by country
    GET    /api/v1/airline/to-airport    airlines flying into an airport
    GET    /api/v1/airline/{key}         fetch
    POST   /api/v1/airline/{key}         create (409 if the key exists)
    PUT    /api/v1/airline/{key}         create or replace
    DELETE /api/v1/airline/{key}         remove

The static paths are declared before /{key} so they are matched first.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from app.database import CouchbaseStore, get_store
from app.schemas.airline import Airline
from app.schemas.common import ErrorResponse, MessageResponse, UpsertResponse
from app.services.document_service import airline_documents
from app.services.query_service import query_service

router = APIRouter(prefix="/api/v1/airline", tags=["Airline"])

KEY_DESCRIPTION = "Airline document key, e.g. airline_10"


@router.get(
    "/list",
    response_model=List[Dict[str, Any]],
    responses={500: {"model": ErrorResponse}},
    summary="List airlines",
    description="Airlines ordered by name, optionally restricted to one country.",
)
async def list_airlines(
    country: Optional[str] = Query(default=None, description="Country name, e.g. France"),
    limit: Optional[str] = Query(default=None, description="Page size (default 10)"),
    offset: Optional[str] = Query(default=None, description="Rows to skip (default 0)"),
    store: CouchbaseStore = Depends(get_store),
):
    return await query_service.list_airlines(store, country=country, limit=limit, offset=offset)


@router.get(
    "/to-airport",
    response_model=List[Dict[str, Any]],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Airlines flying to an airport",
    description=(
        "Distinct airlines operating at least one route whose destination is the "
        "given FAA code. The join between route and airline runs in the query engine."
    ),
)
async def airlines_to_airport(
    destinationAirportCode: Optional[str] = Query(default=None, description="FAA code, e.g. JFK"),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    store: CouchbaseStore = Depends(get_store),
):
    return await query_service.airlines_to_airport(
        store, destinationAirportCode, limit=limit, offset=offset
    )


@router.get(
    "/{key}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get an airline by key",
)
async def get_airline(
    key: str = Path(description=KEY_DESCRIPTION),
    store: CouchbaseStore = Depends(get_store),
) -> Dict[str, Any]:
    return await airline_documents.fetch(store, key)


@router.post(
    "/{key}",
    status_code=201,
    response_model=Airline,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid request body", "model": ErrorResponse},
        409: {"description": "Airline already exists", "model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create an airline",
)
async def create_airline(
    key: str = Path(description=KEY_DESCRIPTION),
    payload: Any = Body(..., examples=[{
        "name": "40-Mile Air", "iata": "Q5", "icao": "MLA",
        "callsign": "MILE-AIR", "country": "United States",
    }]),
    store: CouchbaseStore = Depends(get_store),
):
    return await airline_documents.create(store, key, payload)


@router.put(
    "/{key}",
    response_model=UpsertResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Create or replace an airline",
)
async def upsert_airline(
    key: str = Path(description=KEY_DESCRIPTION),
    payload: Any = Body(...),
    store: CouchbaseStore = Depends(get_store),
):
    return await airline_documents.upsert(store, key, payload)


@router.delete(
    "/{key}",
    status_code=202,
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Delete an airline",
)
async def delete_airline(
    key: str = Path(description=KEY_DESCRIPTION),
    store: CouchbaseStore = Depends(get_store),
):
    return await airline_documents.remove(store, key)

"""
Travel Sample API — Airport Route Handlers
============================================

Endpoints:
    GET    /api/v1/airport/list                 airports, optionally by country
    GET    /api/v1/airport/direct-connections   non-stop destinations from an airport
    GET    /api/v1/airport/{key}                fetch
    POST   /api/v1/airport/{key}                create (409 if the key exists)
    PUT    /api/v1/airport/{key}                create or replace
    DELETE /api/v1/airport/{key}                remove
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from app.database import CouchbaseStore, get_store
from app.schemas.airport import Airport
from app.schemas.common import ErrorResponse, MessageResponse, UpsertResponse
from app.services.document_service import airport_documents
from app.services.query_service import query_service

router = APIRouter(prefix="/api/v1/airport", tags=["Airport"])

KEY_DESCRIPTION = "Airport document key, e.g. airport_1254"


@router.get(
    "/list",
    response_model=List[Dict[str, Any]],
    responses={500: {"model": ErrorResponse}},
    summary="List airports",
    description="Airports ordered by name, optionally restricted to one country.",
)
async def list_airports(
    country: Optional[str] = Query(default=None, description="Country name, e.g. United Kingdom"),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    store: CouchbaseStore = Depends(get_store),
):
    return await query_service.list_airports(store, country=country, limit=limit, offset=offset)


@router.get(
    "/direct-connections",
    response_model=List[str],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Direct connections from an airport",
    description="FAA codes of airports reachable with zero stops from the given airport.",
)
async def direct_connections(
    destinationAirportCode: Optional[str] = Query(default=None, description="FAA code, e.g. SFO"),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    store: CouchbaseStore = Depends(get_store),
):
    return await query_service.direct_connections(
        store, destinationAirportCode, limit=limit, offset=offset
    )


@router.get(
    "/{key}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get an airport by key",
)
async def get_airport(
    key: str = Path(description=KEY_DESCRIPTION),
    store: CouchbaseStore = Depends(get_store),
) -> Dict[str, Any]:
    return await airport_documents.fetch(store, key)


@router.post(
    "/{key}",
    status_code=201,
    response_model=Airport,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid request body", "model": ErrorResponse},
        409: {"description": "Airport already exists", "model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create an airport",
)
async def create_airport(
    key: str = Path(description=KEY_DESCRIPTION),
    payload: Any = Body(...),
    store: CouchbaseStore = Depends(get_store),
):
    return await airport_documents.create(store, key, payload)


@router.put(
    "/{key}",
    response_model=UpsertResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Create or replace an airport",
)
async def upsert_airport(
    key: str = Path(description=KEY_DESCRIPTION),
    payload: Any = Body(...),
    store: CouchbaseStore = Depends(get_store),
):
    return await airport_documents.upsert(store, key, payload)


@router.delete(
    "/{key}",
    status_code=202,
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Delete an airport",
)
async def delete_airport(
    key: str = Path(description=KEY_DESCRIPTION),
    store: CouchbaseStore = Depends(get_store),
):
    return await airport_documents.remove(store, key)

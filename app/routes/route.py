"""
Travel Sample API — Route Handlers for Flight Routes
======================================================

Endpoints:
    GET    /api/v1/route/list     routes by source and/or destination airport
    GET    /api/v1/route/{key}    fetch
    POST   /api/v1/route/{key}    create (409 if the key exists)
    PUT    /api/v1/route/{key}    create or replace
    DELETE /api/v1/route/{key}    remove

`airlineid` in a route body is not checked against the airline collection.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from app.database import CouchbaseStore, get_store
from app.schemas.common import ErrorResponse, MessageResponse, UpsertResponse
from app.schemas.route import Route
from app.services.document_service import route_documents
from app.services.query_service import query_service

router = APIRouter(prefix="/api/v1/route", tags=["Route"])

KEY_DESCRIPTION = "Route document key, e.g. route_10000"


@router.get(
    "/list",
    response_model=List[Dict[str, Any]],
    responses={500: {"model": ErrorResponse}},
    summary="List routes",
    description="Routes without schedules, filtered by source and/or destination FAA code.",
)
async def list_routes(
    sourceAirportCode: Optional[str] = Query(default=None, description="FAA code, e.g. TLV"),
    destinationAirportCode: Optional[str] = Query(default=None, description="FAA code, e.g. MRS"),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    store: CouchbaseStore = Depends(get_store),
):
    return await query_service.list_routes(
        store,
        source_airport_code=sourceAirportCode,
        destination_airport_code=destinationAirportCode,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/{key}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a route by key",
)
async def get_route(
    key: str = Path(description=KEY_DESCRIPTION),
    store: CouchbaseStore = Depends(get_store),
) -> Dict[str, Any]:
    return await route_documents.fetch(store, key)


@router.post(
    "/{key}",
    status_code=201,
    response_model=Route,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid request body", "model": ErrorResponse},
        409: {"description": "Route already exists", "model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create a route",
)
async def create_route(
    key: str = Path(description=KEY_DESCRIPTION),
    payload: Any = Body(...),
    store: CouchbaseStore = Depends(get_store),
):
    return await route_documents.create(store, key, payload)


@router.put(
    "/{key}",
    response_model=UpsertResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Create or replace a route",
)
async def upsert_route(
    key: str = Path(description=KEY_DESCRIPTION),
    payload: Any = Body(...),
    store: CouchbaseStore = Depends(get_store),
):
    return await route_documents.upsert(store, key, payload)


@router.delete(
    "/{key}",
    status_code=202,
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Delete a route",
)
async def delete_route(
    key: str = Path(description=KEY_DESCRIPTION),
    store: CouchbaseStore = Depends(get_store),
):
    return await route_documents.remove(store, key)

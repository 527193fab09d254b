"""
Travel Sample API — Hotel Route Handlers (Read-Only)
======================================================

What:  Full-text search over hotels plus fetch-by-key.
How:   Search and filter go through the `hotel_search` index provisioned at
       startup; fetch is a plain key lookup.

Endpoints:
    GET /api/v1/hotel/search   prefix search on name (name required)
    GET /api/v1/hotel/filter   match any combination of text fields
    GET /api/v1/hotel/{key}    fetch
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query

from app.database import CouchbaseStore, get_store
from app.schemas.common import ErrorResponse
from app.schemas.hotel import Hotel, HotelFilter
from app.services.document_service import hotel_documents
from app.services.query_service import query_service

router = APIRouter(prefix="/api/v1/hotel", tags=["Hotel"])


@router.get(
    "/search",
    response_model=List[Dict[str, Any]],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Search hotels by name prefix",
)
async def search_hotels(
    name: Optional[str] = Query(default=None, description="Name prefix, case-insensitive"),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    store: CouchbaseStore = Depends(get_store),
):
    return await query_service.search_hotels(store, name, limit=limit, offset=offset)


@router.get(
    "/filter",
    response_model=List[Hotel],
    responses={500: {"model": ErrorResponse}},
    summary="Filter hotels by text fields",
    description=(
        "All supplied fields must match (conjunction). With no fields, every hotel "
        "matches and only pagination applies."
    ),
)
async def filter_hotels(
    name: Optional[str] = Query(default=None),
    title: Optional[str] = Query(default=None),
    description: Optional[str] = Query(default=None),
    country: Optional[str] = Query(default=None),
    city: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    store: CouchbaseStore = Depends(get_store),
):
    filters = HotelFilter(
        name=name,
        title=title,
        description=description,
        country=country,
        city=city,
        state=state,
    )
    return await query_service.filter_hotels(store, filters, limit=limit, offset=offset)


@router.get(
    "/{key}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a hotel by key",
)
async def get_hotel(
    key: str = Path(description="Hotel document key, e.g. hotel_10025"),
    store: CouchbaseStore = Depends(get_store),
) -> Dict[str, Any]:
    return await hotel_documents.fetch(store, key)

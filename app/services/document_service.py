"""
Travel Sample API — Document Service (Key-Based CRUD)
=======================================================

What:  Generic fetch / create / upsert / remove for one resource family.
Why:   Airline, airport and route share identical CRUD rules; one class
       parameterized by {resource name, collection, schema} replaces four
       hand-copied handler sets.
How:   Each operation validates input (mutations only), makes exactly one
       store call and switches on the returned StoreOutcome.
Who:   Called by the per-resource routers.

Outcome Mapping:
    ┌────────────┬──────────────┬───────────────────────────────────────┐
    │ Operation  │ Success      │ Failure                               │
    ├────────────┼──────────────┼───────────────────────────────────────┤
    │ fetch      │ 200 document │ NOT_FOUND → 404, FAILURE → 500        │
    │ create     │ 201 payload  │ invalid → 400, ALREADY_EXISTS → 409   │
    │ upsert     │ 200 envelope │ invalid → 400, FAILURE → 500          │
    │ remove     │ 202 message  │ NOT_FOUND → 404, FAILURE → 500        │
    └────────────┴──────────────┴───────────────────────────────────────┘

    Create fails closed on an existing key; upsert never reports not-found.
"""

import logging
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from app.database import (
    AIRLINE_COLLECTION,
    AIRPORT_COLLECTION,
    HOTEL_COLLECTION,
    ROUTE_COLLECTION,
    CouchbaseStore,
    StoreOutcome,
    StoreResult,
)
from app.exceptions import ConflictError, DatabaseError, NotFoundError
from app.schemas.airline import Airline
from app.schemas.airport import Airport
from app.schemas.common import normalize, validate_payload
from app.schemas.route import Route

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Key-based CRUD for one collection.

    Attributes:
        resource:   Display name used in messages ("Airline")
        collection: Collection name inside the inventory scope
        schema:     Pydantic model validating create/upsert bodies, or None
                    for read-only resources
    """

    def __init__(self, resource: str, collection: str, schema: Optional[Type[BaseModel]] = None):
        self.resource = resource
        self.collection = collection
        self.schema = schema

    def _fail(self, action: str, key: str, result: StoreResult) -> DatabaseError:
        logger.error(
            "%s %s failed for key %s: %s", self.resource, action, key, result.error
        )
        return DatabaseError(
            message=f"An error occurred while {action} {self.resource.lower()}",
            context={"key": key, "store_error": result.error},
        )

    def _validated(self, raw: Any) -> Dict[str, Any]:
        if self.schema is None:
            raise TypeError(f"{self.resource} is read-only")
        return normalize(validate_payload(self.schema, raw))

    async def fetch(self, store: CouchbaseStore, key: str) -> Dict[str, Any]:
        result = await store.get(self.collection, key)
        if result.outcome is StoreOutcome.NOT_FOUND:
            raise NotFoundError(resource=self.resource, key=key)
        if not result.ok:
            raise self._fail("fetching", key, result)
        return result.value

    async def create(self, store: CouchbaseStore, key: str, raw: Any) -> Dict[str, Any]:
        """
        Insert a new document under `key`.

        Returns:
            The normalized payload that was stored

        Raises:
            ValidationError: body does not match the schema (no store call made)
            ConflictError:   key already populated; existing document untouched
            DatabaseError:   any other store failure
        """
        document = self._validated(raw)
        result = await store.insert(self.collection, key, document)
        if result.outcome is StoreOutcome.ALREADY_EXISTS:
            raise ConflictError(resource=self.resource, key=key)
        if not result.ok:
            raise self._fail("creating", key, result)
        logger.info("%s %s created", self.resource, key)
        return document

    async def upsert(self, store: CouchbaseStore, key: str, raw: Any) -> Dict[str, Any]:
        """
        Create or fully replace the document under `key`.

        Idempotent: repeating the call with the same body stores the same
        document and returns the same envelope.
        """
        document = self._validated(raw)
        result = await store.upsert(self.collection, key, document)
        if not result.ok:
            raise self._fail("updating", key, result)
        logger.info("%s %s upserted", self.resource, key)
        return {"id": key, "data": document}

    async def remove(self, store: CouchbaseStore, key: str) -> Dict[str, str]:
        result = await store.remove(self.collection, key)
        if result.outcome is StoreOutcome.NOT_FOUND:
            raise NotFoundError(resource=self.resource, key=key)
        if not result.ok:
            raise self._fail("deleting", key, result)
        logger.info("%s %s removed", self.resource, key)
        return {"message": f"Successfully deleted {self.resource.lower()}"}


# ── Per-Resource Instances ────────────────────────────────────────────────
airline_documents = DocumentService("Airline", AIRLINE_COLLECTION, Airline)
airport_documents = DocumentService("Airport", AIRPORT_COLLECTION, Airport)
route_documents = DocumentService("Route", ROUTE_COLLECTION, Route)
hotel_documents = DocumentService("Hotel", HOTEL_COLLECTION)

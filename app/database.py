"""
Travel Sample API — Document Store Facade
===========================================

What:  Async Couchbase facade exposing the handful of operations the API uses:
       key-based get/insert/upsert/remove, scope-level parameterized queries
       and full-text search.
Why:   Centralizes all connection logic and store error classification in one
       place, so routes and services never touch SDK types.
How:   One CouchbaseStore is constructed by create_app() and stored on
       app.state; handlers receive it through the get_store dependency.
       The cluster connection is opened lazily on first use and reused for the
       process lifetime.
Who:   Used by the services layer and the search index provisioning step.

Outcome Classification:
    Every operation returns a StoreResult instead of raising:

        StoreOutcome.OK              operation succeeded, value holds the payload
        StoreOutcome.NOT_FOUND       key does not exist (get, remove)
        StoreOutcome.ALREADY_EXISTS  key already populated (insert)
        StoreOutcome.FAILURE         anything else: connectivity, timeout,
                                     query syntax, search engine errors

    Callers switch on the outcome. SDK exception types never cross this module.

Retries:
    None. A failed call is reported once; retry policy belongs to the SDK.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Optional

from acouchbase.cluster import Cluster
from couchbase.auth import PasswordAuthenticator
from couchbase.exceptions import (
    CouchbaseException,
    DocumentExistsException,
    DocumentNotFoundException,
)
from couchbase.management.search import SearchIndex
from couchbase.options import ClusterOptions, QueryOptions, SearchOptions
from starlette.requests import Request

from app.config import Settings, settings

logger = logging.getLogger(__name__)

# Collections of the travel inventory scope
AIRLINE_COLLECTION = "airline"
AIRPORT_COLLECTION = "airport"
ROUTE_COLLECTION = "route"
HOTEL_COLLECTION = "hotel"


class StoreOutcome(enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    FAILURE = "failure"


@dataclass
class StoreResult:
    """
    Outcome of one store call.

    Attributes:
        outcome: Classification of the call (see StoreOutcome)
        value:   Document, row list or None, depending on the operation
        error:   Short description of the underlying failure (logging only)
    """
    outcome: StoreOutcome
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is StoreOutcome.OK

    @classmethod
    def success(cls, value: Any = None) -> "StoreResult":
        return cls(StoreOutcome.OK, value)

    @classmethod
    def failure(cls, exc: BaseException) -> "StoreResult":
        return cls(StoreOutcome.FAILURE, error=f"{type(exc).__name__}: {exc}")


class CouchbaseStore:
    """
    Lazily connected Couchbase facade.

    Connection lifecycle:
        - Constructed without I/O (safe at import and in tests)
        - First operation opens the cluster, the bucket and the scope
        - An asyncio.Lock makes concurrent first requests share one connect
        - Once connected the handles are read-only for the process lifetime
        - A failed connect is reported as FAILURE and not cached, so a later
          request will try again
    """

    def __init__(self, config: Settings = settings):
        self._config = config
        self._cluster: Optional[Cluster] = None
        self._scope = None
        self._collections: Dict[str, Any] = {}
        self._lock = asyncio.Lock()

    # ── Connection ────────────────────────────────────────────────────────

    async def _connect(self) -> None:
        """Open the cluster, bucket and scope once per process."""
        if self._cluster is not None:
            return
        async with self._lock:
            if self._cluster is not None:
                return

            cfg = self._config
            options = ClusterOptions(PasswordAuthenticator(cfg.db_username, cfg.db_password))
            if cfg.db_config_profile:
                options.apply_profile(cfg.db_config_profile)

            logger.info("Connecting to Couchbase at %s (bucket=%s)", cfg.db_conn_str, cfg.db_bucket_name)
            cluster = await Cluster.connect(cfg.db_conn_str, options)
            try:
                await cluster.wait_until_ready(timedelta(seconds=cfg.db_connect_timeout))
                bucket = cluster.bucket(cfg.db_bucket_name)
                await bucket.on_connect()
            except CouchbaseException:
                # Release the half-open handle; the next request reconnects
                await cluster.close()
                raise

            self._scope = bucket.scope(cfg.db_scope_name)
            self._cluster = cluster
            logger.info("Couchbase connection established")

    def _collection(self, name: str):
        if name not in self._collections:
            self._collections[name] = self._scope.collection(name)
        return self._collections[name]

    async def close(self) -> None:
        """Close the cluster connection if one was opened."""
        if self._cluster is None:
            return
        try:
            await self._cluster.close()
        except CouchbaseException as e:
            logger.warning("Error while closing Couchbase connection: %s", e)
        finally:
            self._cluster = None
            self._scope = None
            self._collections = {}

    # ── Key-Value Operations ──────────────────────────────────────────────

    async def get(self, collection: str, key: str) -> StoreResult:
        try:
            await self._connect()
            result = await self._collection(collection).get(key)
            return StoreResult.success(result.content_as[dict])
        except DocumentNotFoundException:
            return StoreResult(StoreOutcome.NOT_FOUND)
        except CouchbaseException as e:
            logger.error("get %s/%s failed: %s", collection, key, e)
            return StoreResult.failure(e)

    async def insert(self, collection: str, key: str, value: Dict[str, Any]) -> StoreResult:
        try:
            await self._connect()
            await self._collection(collection).insert(key, value)
            return StoreResult.success(value)
        except DocumentExistsException:
            return StoreResult(StoreOutcome.ALREADY_EXISTS)
        except CouchbaseException as e:
            logger.error("insert %s/%s failed: %s", collection, key, e)
            return StoreResult.failure(e)

    async def upsert(self, collection: str, key: str, value: Dict[str, Any]) -> StoreResult:
        try:
            await self._connect()
            await self._collection(collection).upsert(key, value)
            return StoreResult.success(value)
        except CouchbaseException as e:
            logger.error("upsert %s/%s failed: %s", collection, key, e)
            return StoreResult.failure(e)

    async def remove(self, collection: str, key: str) -> StoreResult:
        try:
            await self._connect()
            await self._collection(collection).remove(key)
            return StoreResult.success()
        except DocumentNotFoundException:
            return StoreResult(StoreOutcome.NOT_FOUND)
        except CouchbaseException as e:
            logger.error("remove %s/%s failed: %s", collection, key, e)
            return StoreResult.failure(e)

    # ── Query & Search ────────────────────────────────────────────────────

    async def query(self, statement: str, params: Optional[Dict[str, Any]] = None) -> StoreResult:
        """
        Run a SQL++ statement against the inventory scope.

        Collection names in the statement resolve inside the scope, so
        `FROM airline` reads travel-sample.inventory.airline.

        Returns:
            StoreResult whose value is the list of row dicts
        """
        try:
            await self._connect()
            result = self._scope.query(statement, QueryOptions(named_parameters=params or {}))
            rows = [row async for row in result.rows()]
            return StoreResult.success(rows)
        except CouchbaseException as e:
            logger.error("Query failed: %s | params=%s", e, params)
            return StoreResult.failure(e)

    async def search(
        self,
        index_name: str,
        search_query: Any,
        limit: int,
        skip: int,
        fields: Optional[List[str]] = None,
    ) -> StoreResult:
        """
        Run a full-text search query against a cluster search index.

        Returns:
            StoreResult whose value is a list of {"id", "fields"} dicts
        """
        try:
            await self._connect()
            options = SearchOptions(limit=limit, skip=skip, fields=fields or ["*"])
            result = self._cluster.search_query(index_name, search_query, options)
            rows = [{"id": row.id, "fields": row.fields or {}} async for row in result.rows()]
            return StoreResult.success(rows)
        except CouchbaseException as e:
            logger.error("Search on index %s failed: %s", index_name, e)
            return StoreResult.failure(e)

    # ── Cluster Management ────────────────────────────────────────────────

    async def ping(self) -> StoreResult:
        try:
            await self._connect()
            await self._cluster.ping()
            return StoreResult.success()
        except CouchbaseException as e:
            logger.warning("Couchbase ping failed: %s", e)
            return StoreResult.failure(e)

    async def search_index_names(self) -> StoreResult:
        try:
            await self._connect()
            indexes = await self._cluster.search_indexes().get_all_indexes()
            return StoreResult.success([idx.name for idx in indexes])
        except CouchbaseException as e:
            logger.error("Listing search indexes failed: %s", e)
            return StoreResult.failure(e)

    async def upsert_search_index(self, definition: Dict[str, Any]) -> StoreResult:
        try:
            await self._connect()
            await self._cluster.search_indexes().upsert_index(SearchIndex.from_json(definition))
            return StoreResult.success(definition.get("name"))
        except CouchbaseException as e:
            logger.error("Upserting search index %s failed: %s", definition.get("name"), e)
            return StoreResult.failure(e)


# ── Dependency ────────────────────────────────────────────────────────────
def get_store(request: Request) -> CouchbaseStore:
    """
    FastAPI dependency returning the process-wide store.

    The store is created once by create_app() and kept on app.state.
    Tests pass an in-memory store to create_app(store=...).
    """
    return request.app.state.store

"""
Travel Sample API — Full-Text Search Index Provisioning
=========================================================

What:  Ensures the hotel search index exists on the cluster.
Why:   The hotel search/filter endpoints query a search index that is not part
       of the travel-sample bucket by default.
How:   Reads a static index definition (one object or a list of objects) and
       upserts every definition whose name is not already on the cluster.
When:  Once during application startup, when PROVISION_SEARCH_INDEX is true.

Failure policy:
    Provisioning never stops the server. An unreadable file, malformed JSON or a
    store failure is logged and the step returns; the search endpoints will
    then answer 500 until the index exists.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from app.database import CouchbaseStore

logger = logging.getLogger(__name__)


def load_index_definitions(path: str) -> List[Dict[str, Any]]:
    """
    Read index definitions from disk.

    Raises:
        FileNotFoundError: the definition file does not exist
        OSError:           the file exists but cannot be read
        ValueError:        the file is not valid JSON or has no index objects
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    definitions = data if isinstance(data, list) else [data]
    if not definitions or not all(isinstance(d, dict) and d.get("name") for d in definitions):
        raise ValueError("Index definition must be an object (or list of objects) with a name")
    return definitions


async def ensure_search_indexes(store: CouchbaseStore, path: str) -> List[str]:
    """
    Create missing search indexes.

    Returns:
        Names of the indexes that were created during this call
    """
    try:
        definitions = load_index_definitions(path)
    except FileNotFoundError:
        logger.error("Search index file not found: %s", path)
        return []
    except OSError as e:
        logger.error("Search index file %s could not be read: %s", path, e)
        return []
    except ValueError as e:
        logger.error("Error parsing search index file %s: %s", path, e)
        return []

    existing = await store.search_index_names()
    if not existing.ok:
        logger.error("Could not list search indexes, skipping provisioning: %s", existing.error)
        return []

    created = []
    for definition in definitions:
        name = definition["name"]
        if name in existing.value:
            logger.info("Index creation skipped: an index named %r already exists", name)
            continue

        result = await store.upsert_search_index(definition)
        if result.ok:
            logger.info("Search index %s created", name)
            created.append(name)
        else:
            logger.error("Error creating search index %s: %s", name, result.error)

    return created

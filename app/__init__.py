"""
Travel Sample API — Application Package Initializer
=====================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (CRUD and queries)     │  ← validation, outcome mapping
    ├─────────────────────────────────────┤
    │        Schemas (Pydantic)           │  ← one model per resource
    ├─────────────────────────────────────┤
    │     Store facade (Couchbase)        │  ← one lazy connection
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

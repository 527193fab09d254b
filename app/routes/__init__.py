# Routes package init
"""
Travel Sample API — API Routes Package
========================================

What:  HTTP route handlers for the travel inventory.

Route Inventory:
    - airline.py:  /api/v1/airline/{key} CRUD, /list, /to-airport
    - airport.py:  /api/v1/airport/{key} CRUD, /list, /direct-connections
    - route.py:    /api/v1/route/{key} CRUD, /list
    - hotel.py:    /api/v1/hotel/{key}, /search, /filter (read-only)
    - health.py:   GET /health

Routes stay thin: they pull values out of the request, call a service, and
let the global exception handlers shape any error response.
"""

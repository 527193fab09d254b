# Middleware package init
"""
Travel Sample API — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: picks up or generates the correlation ID first
    2. Logging: writes one access line per request, tagged with that ID
"""

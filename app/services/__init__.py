# Services package init
"""
Travel Sample API — Services Layer
====================================

What:  Logic between the route handlers (HTTP) and the store facade.
How:   Services take a store plus plain values, translate store outcomes into
       application exceptions, and return JSON-ready data.

Service Inventory:
    - document_service: validated create/replace, fetch and delete by key
    - query_service: list, join and full-text reads with pagination
    - search_index: startup provisioning of the hotel search index
"""

"""
Travel Sample API — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions let every route raise a domain outcome and have a
       single set of global handlers (registered in main.py) turn it into the
       right HTTP status code and JSON envelope.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by services; caught by global handlers.
When:  During request processing when an operation cannot succeed.

Exception Hierarchy:
    TravelAPIError (base)
    ├── ValidationError      → 400 Bad Request   {message, error: [violations]}
    ├── MissingFilterError   → 400 Bad Request   {message}
    ├── NotFoundError        → 404 Not Found     {message, error}
    ├── ConflictError        → 409 Conflict      {message, error}
    └── DatabaseError        → 500 Server Error  {message}

The store facade never raises these: it reports outcomes as a StoreOutcome
value (see app.database) and the services translate outcomes to exceptions.
"""

from typing import Any, Dict, List, Optional


class TravelAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TravelAPIError):
    """
    Raised when a request body fails schema validation.

    HTTP:    400 Bad Request

    `errors` holds every violated constraint as {"field", "message"} pairs,
    in the order the schema reported them, so clients can render a complete
    diagnostic in one round trip.

    Example response:
        {
            "message": "Invalid request body",
            "error": [
                {"field": "country", "message": "Field required"},
                {"field": "geo.lat", "message": "Input should be a valid number"}
            ]
        }
    """

    def __init__(
        self,
        message: str = "Invalid request body",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors or []


class MissingFilterError(TravelAPIError):
    """
    Raised when a query endpoint is called without its mandatory filter.

    HTTP:    400 Bad Request
    When:    Checked before any store access (e.g. /airline/to-airport
             without destinationAirportCode).
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(TravelAPIError):
    """
    Raised when a key-addressed document does not exist.

    HTTP:    404 Not Found
    When:    Fetch or remove targets a missing key. Upsert never raises this.
    """

    def __init__(
        self,
        resource: str = "Document",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if key:
            ctx["key"] = key
        super().__init__(message=f"{resource} not found", context=ctx)


class ConflictError(TravelAPIError):
    """
    Raised when create targets a key that is already populated.

    HTTP:    409 Conflict
    The existing document is left untouched.
    """

    def __init__(
        self,
        resource: str = "Document",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if key:
            ctx["key"] = key
        super().__init__(message=f"{resource} already exists", context=ctx)


class DatabaseError(TravelAPIError):
    """
    Raised when a store operation fails for any unclassified reason.

    What:    Connectivity loss, timeout, query syntax error, search failure.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always a short generic string.
        The underlying store error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "An error occurred while accessing the database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

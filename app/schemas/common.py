"""
Travel Sample API — Shared Schemas and Validation Helper
==========================================================

What:  Response envelopes shared by every resource, plus the helper that
       validates a raw request body against a resource schema.
Why:   Every endpoint follows the same envelope convention; keeping the models
       here documents that convention once in the OpenAPI output.

Validation contract:
    validate_payload(Model, raw) either returns a Model instance or raises
    app.exceptions.ValidationError carrying one {"field", "message"} entry per
    violated constraint. Nested fields are reported with dotted paths
    ("geo.lat", "schedule.0.day").
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_location(loc) -> str:
    """("geo", "lat") → "geo.lat"; the top-level "body" marker is dropped."""
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) or "body"


def format_errors(errors) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ordered {"field", "message"} pairs."""
    return [
        {"field": format_location(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in errors
    ]


def validate_payload(model: Type[ModelT], raw: Any) -> ModelT:
    """
    Validate an untyped payload against a resource schema.

    Raises:
        ValidationError: with the complete list of field violations
    """
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(errors=format_errors(e.errors()))


def normalize(instance: BaseModel) -> Dict[str, Any]:
    """Stored form of a validated payload: unset optional fields are omitted."""
    return instance.model_dump(exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. the 202 body of a delete."""
    message: str


class UpsertResponse(BaseModel):
    """
    What:  200 body of every PUT.
    Names the key that was written and echoes the normalized document.
    """
    id: str = Field(description="Document key that was created or replaced")
    data: Dict[str, Any] = Field(description="Normalized document as stored")


class FieldViolation(BaseModel):
    field: str = Field(description="Dotted path of the offending field")
    message: str = Field(description="Why the value was rejected")


class ErrorResponse(BaseModel):
    """
    What:  Error envelope shared by all endpoints.

    Fields:
        message: Human-readable description, always present
        error:   Mirror of message for 404/409, violation list for 400
                 validation failures, absent otherwise
    """
    message: str = Field(description="Human-readable error description")
    error: Optional[Union[str, List[FieldViolation]]] = Field(
        default=None, description="Error detail"
    )


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Couchbase connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

"""
Travel Sample API — Route Schema
==================================

A route links a source airport to a destination airport through an airline.
`airlineid` is the key of an airline document (e.g. "airline_137"); it is a
logical reference only and is not checked against the airline collection.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Schedule(BaseModel):
    """One scheduled departure of a route."""
    day: int = Field(strict=True, ge=0, le=6, description="Day of week, 0 = Sunday")
    flight: str = Field(examples=["AF198"])
    utc: str = Field(
        pattern=r"^([01]\d|2[0-3]):[0-5]\d:[0-5]\d$",
        description="Departure time of day (HH:MM:SS, UTC)",
        examples=["10:13:00"],
    )


class Route(BaseModel):
    """
    What:  Canonical route document.
    Keys:  `route_<id>` in the `route` collection.

    Example:
        {
            "airline": "AF",
            "airlineid": "airline_137",
            "sourceairport": "TLV",
            "destinationairport": "MRS",
            "stops": 0,
            "equipment": "320",
            "schedule": [{"day": 0, "utc": "10:13:00", "flight": "AF198"}],
            "distance": 2881.617376098415
        }
    """
    id: Optional[int] = Field(default=None, description="Numeric route id")
    type: Optional[str] = Field(default=None, description="Document type discriminator")
    airline: str = Field(description="Airline IATA code", examples=["AF"])
    airlineid: str = Field(description="Key of the operating airline", examples=["airline_137"])
    sourceairport: str = Field(description="FAA code of origin", examples=["TLV"])
    destinationairport: str = Field(description="FAA code of destination", examples=["MRS"])
    stops: int = Field(strict=True, ge=0)
    equipment: str = Field(description="Aircraft type codes", examples=["320"])
    schedule: List[Schedule]
    distance: float = Field(strict=True, ge=0, description="Great-circle distance in km")

    model_config = {"extra": "ignore", "allow_inf_nan": False}

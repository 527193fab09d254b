"""
Travel Sample API — Airline Schema
====================================

Stored under keys like `airline_10` in the `airline` collection.

`id` and `type` are document discriminators written by the dataset loader;
they are accepted when a client sends them but never required.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Airline(BaseModel):
    """
    What:  Canonical airline document.

    Example:
        {
            "name": "40-Mile Air",
            "iata": "Q5",
            "icao": "MLA",
            "callsign": "MILE-AIR",
            "country": "United States"
        }
    """
    id: Optional[int] = Field(default=None, description="Numeric airline id")
    type: Optional[str] = Field(default=None, description="Document type discriminator")
    callsign: str = Field(description="Radio callsign", examples=["MILE-AIR"])
    country: str = Field(description="Country of registration", examples=["United States"])
    iata: str = Field(description="IATA airline designator", examples=["Q5"])
    icao: str = Field(description="ICAO airline designator", examples=["MLA"])
    name: str = Field(description="Airline name", examples=["40-Mile Air"])

    model_config = {"extra": "ignore"}

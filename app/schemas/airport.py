"""
Travel Sample API — Airport Schema
====================================

`city`, `country` and `faa` are always present. `geo` is optional, but when
supplied it must carry all three coordinates as finite JSON numbers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Geo(BaseModel):
    lat: float = Field(strict=True, description="Latitude in decimal degrees")
    lon: float = Field(strict=True, description="Longitude in decimal degrees")
    alt: float = Field(strict=True, description="Altitude in feet")

    # NaN and infinities have no JSON form
    model_config = {"allow_inf_nan": False}


class Airport(BaseModel):
    """
    What:  Canonical airport document.
    Keys:  `airport_<id>` in the `airport` collection.
    """
    id: Optional[int] = Field(default=None, description="Numeric airport id")
    type: Optional[str] = Field(default=None, description="Document type discriminator")
    airportname: Optional[str] = Field(default=None, examples=["Calais Dunkerque"])
    city: str = Field(examples=["Calais"])
    country: str = Field(examples=["France"])
    faa: str = Field(description="FAA / IATA code", examples=["CQF"])
    icao: Optional[str] = Field(default=None, examples=["LFAC"])
    tz: Optional[str] = Field(default=None, description="IANA timezone", examples=["Europe/Paris"])
    geo: Optional[Geo] = None

    model_config = {"extra": "ignore"}

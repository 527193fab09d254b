"""
Travel Sample API — Hotel Schemas
===================================

Hotels are read-only through this API. Every descriptive field is optional;
the filter endpoint uses the same six text fields as its query parameters.
"""

from typing import Optional

from pydantic import BaseModel

# Text fields searchable through the hotel full-text index
HOTEL_TEXT_FIELDS = ("name", "title", "description", "country", "city", "state")


class HotelFilter(BaseModel):
    """Optional full-text filters accepted by GET /hotel/filter."""
    name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    model_config = {"extra": "ignore"}

    def present(self):
        """(field, value) pairs for the filters that were actually supplied."""
        return [(field, getattr(self, field)) for field in HOTEL_TEXT_FIELDS if getattr(self, field)]


class Hotel(HotelFilter):
    """Hotel row returned by the filter endpoint."""
    id: Optional[str] = None

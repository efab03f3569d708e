# =============================================================================
# core/models/playspace.py - Playspace Schemas
# =============================================================================
# These models define the shape of a playspace listing:
# - Coordinates / Location: structured location value
# - PlayspaceCreate: the normalized record written to the playspaces table
# - ImageUpload / PlayspaceSubmission: raw request input, before validation
#
# Rows read back from Supabase are returned verbatim as dicts; these models
# only govern what we write.
# =============================================================================

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _zero_if_empty(value: Any) -> Any:
    """Treat missing, null and empty coordinate values as 0."""
    if value is None or value == "":
        return 0
    return value


class Coordinates(BaseModel):
    """
    Latitude/longitude pair.

    Both values default to 0 when absent, null or empty.

    Example:
        {"lat": 51.5072, "lng": -0.1276}
    """

    lat: float = Field(default=0, description="Latitude")
    lng: float = Field(default=0, description="Longitude")

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def default_to_zero(cls, value: Any) -> Any:
        return _zero_if_empty(value)


class Location(BaseModel):
    """
    Where a playspace is.

    `address` is free text and is not required; `coordinates` falls back to
    (0, 0) when omitted.

    Example:
        {"address": "123 Main St", "coordinates": {"lat": 1, "lng": 2}}
    """

    address: str | None = Field(
        default=None,
        description="Street address or free-form place description"
    )

    coordinates: Coordinates = Field(
        default_factory=Coordinates,
        description="Geographic coordinates"
    )

    @field_validator("coordinates", mode="before")
    @classmethod
    def default_coordinates(cls, value: Any) -> Any:
        return Coordinates() if value is None else value


class PlayspaceCreate(BaseModel):
    """
    Normalized playspace record, ready for insertion.

    Example:
        {
            "name": "Backyard",
            "description": "Quiet yard",
            "price": 0,
            "image": null,
            "location": {"address": "A", "coordinates": {"lat": 10, "lng": 20}},
            "amenities": []
        }
    """

    name: str = Field(..., min_length=1, description="Listing name")
    description: str = Field(..., min_length=1, description="Listing description")
    price: int | float = Field(default=0, description="Price; 0 when not given")
    image: str | None = Field(default=None, description="Public URL of the uploaded image")
    location: Location = Field(..., description="Structured location")
    amenities: list[str] = Field(default_factory=list, description="Ordered amenity tags")

    def to_row(self) -> dict[str, Any]:
        """Serialize for the playspaces table (JSON-compatible, image kept as null)."""
        return self.model_dump(mode="json")


@dataclass
class ImageUpload:
    """An image attached to a create request, already read into memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class PlayspaceSubmission:
    """
    Raw create-request fields as received.

    `location` and `amenities` may be structured values (JSON bodies,
    repeated form fields) or JSON-encoded text (single form fields).
    """

    name: Any = None
    description: Any = None
    price: Any = None
    location: Any = None
    amenities: Any = None
    image: ImageUpload | None = None

"""
GeoJSON location shared by cat documents and requests.
"""
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class GeoPoint(BaseModel):
    """GeoJSON point. Coordinates are [longitude, latitude], longitude first."""
    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(..., min_length=2, max_length=2)

    @field_validator("coordinates")
    @classmethod
    def check_ranges(cls, v: list[float]) -> list[float]:
        # Bounds enforced by the 2dsphere index
        lng, lat = v
        if not -180 <= lng <= 180:
            raise ValueError("Longitude must be between -180 and 180")
        if not -90 <= lat <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        return v

    @classmethod
    def from_lng_lat(cls, lng: float, lat: float) -> "GeoPoint":
        return cls(coordinates=[lng, lat])

"""Geodesy Bounded Context - Value Objects.

Immutable data structures representing geographic concepts.
Range validation occurs at construction time via Pydantic.

Ordering of GeoArea corners is deliberately NOT validated here: stored
simulation areas may arrive inverted, and the coverage engine rejects them
with InvalidAreaError before any computation starts.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# GeoPoint
# ---------------------------------------------------------------------------
class GeoPoint(BaseModel):
    """Geographic coordinate in degrees (Value Object).

    Invariants:
        latitude in [-90, 90]
        longitude in [-180, 180]
        both finite

    Pydantic frozen models compare by value, so
    GeoPoint(latitude=1, longitude=2) == GeoPoint(latitude=1, longitude=2).
    """

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# GeoArea
# ---------------------------------------------------------------------------
class GeoArea(BaseModel):
    """Rectangular simulation area given by two corners (Value Object).

    Serialized as ``{"northEast": {...}, "southWest": {...}}`` to keep the
    field names used by stored simulation records.
    """

    north_east: GeoPoint = Field(alias="northEast")
    south_west: GeoPoint = Field(alias="southWest")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_bounds(
        cls, south: float, west: float, north: float, east: float
    ) -> "GeoArea":
        """Build an area from south/west/north/east edges."""
        return cls(
            north_east=GeoPoint(latitude=north, longitude=east),
            south_west=GeoPoint(latitude=south, longitude=west),
        )

    @property
    def lat_span(self) -> float:
        """North-south extent in degrees (negative if corners are inverted)."""
        return self.north_east.latitude - self.south_west.latitude

    @property
    def lng_span(self) -> float:
        """East-west extent in degrees (negative if corners are inverted)."""
        return self.north_east.longitude - self.south_west.longitude

    def is_well_ordered(self) -> bool:
        """True when north_east lies strictly north and east of south_west."""
        return self.lat_span > 0 and self.lng_span > 0

    def contains(self, point: GeoPoint) -> bool:
        """Check if point is inside the area (edges inclusive)."""
        return (
            self.south_west.latitude <= point.latitude <= self.north_east.latitude
            and self.south_west.longitude
            <= point.longitude
            <= self.north_east.longitude
        )

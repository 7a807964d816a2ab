"""Geodesy Bounded Context.

Responsible for geographic primitives and spherical distance calculations:
- Value Objects: GeoPoint, GeoArea
- Services: haversine_distance, rectangle_area_km2
"""

"""
Geographic utility functions.

This module provides core geospatial calculations used throughout the application.
"""

from math import radians, degrees, cos, sin, asin, sqrt
from typing import Tuple

EARTH_RADIUS_KM = 6371.0

# Relative padding added to both box offsets
BOX_SLACK = 1.01


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points in kilometres using Haversine formula.
    
    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point
    
    Returns:
        Distance in kilometres (0.0 for identical points)
    """
    lat1, lon1, lat2, lon2 = map(radians, [float(lat1), float(lon1), float(lat2), float(lon2)])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push a slightly outside [0, 1]; asin is undefined there
    a = min(1.0, max(0.0, a))
    c = 2 * asin(sqrt(a))
    return c * EARTH_RADIUS_KM


def bounding_box(lat: float, lon: float, radius_km: float) -> Tuple[float, float, float, float]:
    """
    Get a latitude/longitude box that fully encloses the circle around a point.

    Used as a coarse database pre-filter; the exact check is distance_km.

    Returns:
        (min_lat, max_lat, min_lon, max_lon)
    """
    lat = float(lat)
    lon = float(lon)
    angular_radius = radius_km / EARTH_RADIUS_KM

    # Widen slightly so points on the circle edge are never cut by the box
    lat_offset = degrees(angular_radius) * BOX_SLACK
    min_lat = lat - lat_offset
    max_lat = lat + lat_offset

    if min_lat <= -90 or max_lat >= 90:
        # Circle reaches a pole, every longitude is inside it
        return max(-90.0, min_lat), min(90.0, max_lat), -180.0, 180.0

    ratio = sin(angular_radius) / cos(radians(lat))
    if ratio >= 1:
        return min_lat, max_lat, -180.0, 180.0

    # Widest longitude reached by the circle, at its tangent points
    lon_offset = degrees(asin(ratio)) * BOX_SLACK
    if lon - lon_offset < -180 or lon + lon_offset > 180:
        # Box crosses the antimeridian, keep the full longitude band
        return min_lat, max_lat, -180.0, 180.0

    return min_lat, max_lat, lon - lon_offset, lon + lon_offset


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """Check latitude/longitude are within their valid ranges."""
    return -90 <= float(lat) <= 90 and -180 <= float(lon) <= 180

"""Common utility functions."""

from .geo import distance_km, bounding_box, is_valid_coordinate

__all__ = [
    "distance_km",
    "bounding_box",
    "is_valid_coordinate",
]

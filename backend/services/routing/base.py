"""Shared types for routing (travel-time) clients."""

from dataclasses import dataclass
from typing import Tuple

# Internal coordinate type: (lat, lon)
LatLon = Tuple[float, float]


class RoutingError(Exception):
    """Raised when a routing provider cannot produce an estimate."""
    pass


@dataclass(frozen=True)
class RouteEstimate:
    duration: str          # e.g. "15 mins"
    duration_value: int    # seconds
    distance: str          # e.g. "3.2 mi"
    distance_value: float  # metres

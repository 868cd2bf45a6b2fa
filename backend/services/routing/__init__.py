"""
Routing (travel-time) clients.

Clients expose ``estimate(origin, destination) -> RouteEstimate`` and raise
RoutingError on any provider failure.
"""

import logging

from common.config import get_routing_config

from .base import LatLon, RouteEstimate, RoutingError
from .formatting import format_distance_miles, format_duration
from .google_maps import GoogleDistanceMatrixClient
from .osrm import OSRMClient

logger = logging.getLogger(__name__)


def get_routing_client():
    """
    Build the routing client configured in settings.ROUTING.

    Returns None when routing is disabled or misconfigured; callers then skip
    travel-time enrichment.
    """
    config = get_routing_config()

    try:
        if config.backend == "google":
            return GoogleDistanceMatrixClient(config.google_maps_api_key, timeout=config.timeout, mode=config.profile)
        if config.backend == "osrm":
            return OSRMClient(config.osrm_base_url, profile=config.profile, timeout=config.timeout)
    except ValueError as e:
        logger.error("Routing backend %r misconfigured: %s", config.backend, e)
        return None

    if config.backend:
        logger.error("Unknown routing backend %r", config.backend)
    return None


__all__ = [
    "LatLon",
    "RouteEstimate",
    "RoutingError",
    "GoogleDistanceMatrixClient",
    "OSRMClient",
    "format_duration",
    "format_distance_miles",
    "get_routing_client",
]

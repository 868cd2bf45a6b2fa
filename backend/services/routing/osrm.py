"""
OSRM client.

Talks to an OSRM server's /route service and normalizes the answer into a
RouteEstimate. OSRM wants coordinates as lon,lat.
"""

import requests

from .base import LatLon, RouteEstimate, RoutingError
from .formatting import format_distance_miles, format_duration


class OSRMClient:

    def __init__(self, base_url: str, profile: str = "driving", timeout: float = 5, session=None):
        if not base_url:
            raise ValueError("OSRM base URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def format_coordinates(*coords: LatLon) -> str:
        """Convert (lat, lon) pairs to OSRM format 'lon,lat;lon,lat'"""
        return ";".join(f"{lon},{lat}" for lat, lon in coords)

    def estimate(self, origin: LatLon, destination: LatLon) -> RouteEstimate:
        coordinates = self.format_coordinates(origin, destination)
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinates}"

        try:
            response = self.session.get(url, params={"overview": "false"}, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise RoutingError(f"OSRM request failed: {e}") from e

        if data.get("code") != "Ok" or not data.get("routes"):
            raise RoutingError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")

        # OSRM may return alternatives; the first route is the best one
        route = data["routes"][0]
        duration = float(route["duration"])
        distance = float(route["distance"])

        return RouteEstimate(
            duration=format_duration(duration),
            duration_value=int(round(duration)),
            distance=format_distance_miles(distance),
            distance_value=distance,
        )

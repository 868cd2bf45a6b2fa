"""
Google Distance Matrix client.

Sole responsibility: talk to the Distance Matrix API over HTTP and return a
normalized RouteEstimate. No dispatch rules here.
"""

import requests

from .base import LatLon, RouteEstimate, RoutingError

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


class GoogleDistanceMatrixClient:
    """Driving time/distance between two points, traffic-aware (departure_time=now)."""

    def __init__(self, api_key: str, timeout: float = 5, mode: str = "driving", session=None):
        if not api_key:
            raise ValueError("Google Maps API key is not configured")
        self.api_key = api_key
        self.timeout = timeout
        self.mode = mode
        self.session = session or requests.Session()

    def estimate(self, origin: LatLon, destination: LatLon) -> RouteEstimate:
        params = {
            "units": "imperial",
            "origins": f"{origin[0]},{origin[1]}",
            "destinations": f"{destination[0]},{destination[1]}",
            "mode": self.mode,
            "traffic_model": "best_guess",
            "departure_time": "now",
            "key": self.api_key,
        }

        try:
            response = self.session.get(DISTANCE_MATRIX_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise RoutingError(f"Google Maps request failed: {e}") from e

        if data.get("status") != "OK":
            raise RoutingError(
                f"Google Maps API status: {data.get('status')} - {data.get('error_message', 'Unknown error')}"
            )

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError) as e:
            raise RoutingError("Google Maps response has no matrix element") from e

        if element.get("status") != "OK":
            raise RoutingError(f"Distance calculation failed: {element.get('status')}")

        return RouteEstimate(
            duration=element["duration"]["text"],
            duration_value=int(element["duration"]["value"]),
            distance=element["distance"]["text"],
            distance_value=float(element["distance"]["value"]),
        )

"""
Typed views over the MATCHING and ROUTING settings dicts.

Resolved on each call so overrides (tests, env) are always honoured.
"""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class MatchingConfig:
    default_radius_km: float = 10
    min_radius_km: float = 1
    max_radius_km: float = 50
    result_limit: int = 20
    travel_time_timeout: float = 5.0

    def clamp_radius(self, radius_km: float) -> float:
        """Bound a requested search radius to the allowed range."""
        return max(self.min_radius_km, min(self.max_radius_km, float(radius_km)))


@dataclass(frozen=True)
class RoutingConfig:
    backend: str = ""
    google_maps_api_key: str = ""
    osrm_base_url: str = ""
    profile: str = "driving"
    timeout: float = 5.0


def get_matching_config() -> MatchingConfig:
    raw = getattr(settings, "MATCHING", {})
    defaults = MatchingConfig()
    return MatchingConfig(
        default_radius_km=raw.get("DEFAULT_RADIUS_KM", defaults.default_radius_km),
        min_radius_km=raw.get("MIN_RADIUS_KM", defaults.min_radius_km),
        max_radius_km=raw.get("MAX_RADIUS_KM", defaults.max_radius_km),
        result_limit=raw.get("RESULT_LIMIT", defaults.result_limit),
        travel_time_timeout=raw.get("TRAVEL_TIME_TIMEOUT", defaults.travel_time_timeout),
    )


def get_routing_config() -> RoutingConfig:
    raw = getattr(settings, "ROUTING", {})
    defaults = RoutingConfig()
    return RoutingConfig(
        backend=(raw.get("BACKEND") or "").lower(),
        google_maps_api_key=raw.get("GOOGLE_MAPS_API_KEY", defaults.google_maps_api_key),
        osrm_base_url=raw.get("OSRM_BASE_URL", defaults.osrm_base_url),
        profile=raw.get("PROFILE", defaults.profile),
        timeout=raw.get("TIMEOUT", defaults.timeout),
    )

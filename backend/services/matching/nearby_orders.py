"""
Nearby-orders orchestration for drivers.

Composes eligibility -> ranking -> travel-time enrichment for the list view and
dispatches accept/reject decisions. Every call reads fresh order and rejection
state; nothing is cached between requests.
"""

import logging
from typing import Optional

from django.db.models import prefetch_related_objects

from common.config import MatchingConfig, get_matching_config
from services.order_management import (
    OrderActionResult,
    get_driver_for_user,
    accept_order,
    reject_order,
    InvalidActionError,
)
from services.routing import get_routing_client

from .eligibility import find_eligible_orders
from .ranking import rank_candidates
from .travel_time import TravelTimeEnricher
from .types import NearbyOrdersResult

logger = logging.getLogger(__name__)

INACTIVE_MESSAGE = "Driver is not active or offline"

_ACTIONS = {
    "accept": accept_order,
    "reject": reject_order,
}


class MatchingService:

    def __init__(self, routing_client=None, config: Optional[MatchingConfig] = None):
        self.config = config or get_matching_config()
        self.enricher = TravelTimeEnricher(routing_client, timeout=self.config.travel_time_timeout)

    @classmethod
    def from_settings(cls) -> "MatchingService":
        return cls(routing_client=get_routing_client())

    def resolve_radius(self, driver, radius_km: Optional[float]) -> float:
        """Requested radius, else the driver's own delivery radius, bounded to the allowed range."""
        if radius_km is None:
            radius_km = driver.max_delivery_radius or self.config.default_radius_km
        return self.config.clamp_radius(radius_km)

    def get_nearby_orders(self, user, radius_km: Optional[float] = None) -> NearbyOrdersResult:
        """
        Candidate orders for the requesting driver, nearest first.

        Args:
            user: User model instance (driver)
            radius_km: Search radius in km; defaults to the driver's max delivery radius

        Returns:
            NearbyOrdersResult; empty with a message when the driver is inactive/offline

        Raises:
            DriverNotFoundError: If the user has no driver profile
            LocationUnavailableError: If the driver has no current location
        """
        driver = get_driver_for_user(user)
        radius = self.resolve_radius(driver, radius_km)

        if not driver.accepts_orders:
            return NearbyOrdersResult(
                orders=[],
                driver_location=driver.location,
                search_radius=radius,
                message=INACTIVE_MESSAGE,
            )

        candidates = find_eligible_orders(driver, radius)
        ranked = rank_candidates(candidates, limit=self.config.result_limit)

        prefetch_related_objects([c.order for c in ranked], "items")
        for candidate in ranked:
            candidate.items = list(candidate.order.items.all())

        self.enricher.enrich(driver.location, ranked)

        logger.info(
            "Driver %s: %d nearby orders (radius=%skm)",
            driver.id, len(ranked), radius
        )

        return NearbyOrdersResult(
            orders=ranked,
            driver_location=driver.location,
            search_radius=radius,
        )

    def handle_order_action(self, user, order_id, action: str) -> OrderActionResult:
        """Dispatch a driver's accept/reject decision."""
        handler = _ACTIONS.get(action)
        if handler is None:
            raise InvalidActionError()
        return handler(user, order_id)

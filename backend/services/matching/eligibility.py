"""
Decide which orders a driver may be offered.

An order is eligible when it is unassigned, pending delivery, not cancelled or
delivered, has destination coordinates within the search radius, and was never
rejected by this driver.
"""

import logging
from typing import List

from common.utils import bounding_box, distance_km
from drivers.models import DriverProfile
from orders.models import Order
from services.order_management.exceptions import LocationUnavailableError

from .types import Candidate

logger = logging.getLogger(__name__)


def find_eligible_orders(driver: DriverProfile, radius_km: float) -> List[Candidate]:
    """
    Collect eligible orders for one driver with their great-circle distance.
    
    Args:
        driver: DriverProfile doing the search
        radius_km: Search radius in kilometres (already bounded by the caller)
    
    Returns:
        Unordered list of Candidate
    
    Raises:
        LocationUnavailableError: If the driver has no current coordinates
    """
    location = driver.location
    if location is None:
        raise LocationUnavailableError()

    driver_lat, driver_lon = location

    # Status, assignment and rejection checks run in SQL; the box trims the
    # rows that need an exact Haversine check
    orders = (
        Order.objects.unassigned_pending_with_coordinates()
        .not_rejected_by(driver)
        .within_box(*bounding_box(driver_lat, driver_lon, radius_km))
        .select_related("customer")
    )

    candidates: List[Candidate] = []
    for order in orders:
        dest_lat, dest_lon = order.destination
        distance = distance_km(driver_lat, driver_lon, dest_lat, dest_lon)
        if distance <= radius_km:
            candidates.append(Candidate(order=order, distance=distance))

    logger.debug(
        "Driver %s: %d eligible orders within %skm",
        driver.id, len(candidates), radius_km
    )
    return candidates

"""
Order management service - driver decisions and delivery lifecycle.

This module handles:
    - Accepting orders (race-safe assignment)
    - Rejecting orders (per-driver exclusion)
    - Delivery status progression
    - Querying a driver's assigned orders
"""

from .order_actions import (
    OrderActionResult,
    get_driver_for_user,
    accept_order,
    reject_order,
    update_delivery_status,
    get_driver_orders,
    check_delivery_transition,
)

from .exceptions import (
    MatchingError,
    DriverNotFoundError,
    LocationUnavailableError,
    OrderNotFoundError,
    AlreadyAssignedError,
    InvalidActionError,
    InvalidStatusTransitionError,
)

__all__ = [
    # Operations
    "OrderActionResult",
    "get_driver_for_user",
    "accept_order",
    "reject_order",
    "update_delivery_status",
    "get_driver_orders",
    "check_delivery_transition",
    # Exceptions
    "MatchingError",
    "DriverNotFoundError",
    "LocationUnavailableError",
    "OrderNotFoundError",
    "AlreadyAssignedError",
    "InvalidActionError",
    "InvalidStatusTransitionError",
]

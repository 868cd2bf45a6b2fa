"""
Services package - Business logic layer.

This package contains all business logic services that operate on Django models
but are decoupled from the HTTP/WebSocket layer.

Modules:
    - matching: Nearby-order search, ranking and travel-time enrichment
    - order_management: Accept/reject decisions and delivery lifecycle
    - routing: Travel-time providers (Google Distance Matrix, OSRM)
"""

# Expose commonly used functions at package level
from .matching import (
    MatchingService,
    find_eligible_orders,
    rank_candidates,
    TravelTimeEnricher,
)
from .order_management import (
    accept_order,
    reject_order,
    update_delivery_status,
    get_driver_orders,
    MatchingError,
    DriverNotFoundError,
    LocationUnavailableError,
    OrderNotFoundError,
    AlreadyAssignedError,
    InvalidActionError,
    InvalidStatusTransitionError,
)

__all__ = [
    # Matching
    "MatchingService",
    "find_eligible_orders",
    "rank_candidates",
    "TravelTimeEnricher",
    # Order management
    "accept_order",
    "reject_order",
    "update_delivery_status",
    "get_driver_orders",
    # Exceptions
    "MatchingError",
    "DriverNotFoundError",
    "LocationUnavailableError",
    "OrderNotFoundError",
    "AlreadyAssignedError",
    "InvalidActionError",
    "InvalidStatusTransitionError",
]

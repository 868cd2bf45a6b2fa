"""
Driver/order matching service.

This module handles:
    - Finding eligible orders near a driver
    - Ranking them (distance, then recency)
    - Travel-time enrichment
    - Dispatching accept/reject decisions
"""

from .eligibility import find_eligible_orders
from .ranking import rank_candidates, RESULT_LIMIT
from .travel_time import TravelTimeEnricher
from .types import Candidate, TravelTime, NearbyOrdersResult
from .nearby_orders import MatchingService, INACTIVE_MESSAGE

__all__ = [
    "find_eligible_orders",
    "rank_candidates",
    "RESULT_LIMIT",
    "TravelTimeEnricher",
    "Candidate",
    "TravelTime",
    "NearbyOrdersResult",
    "MatchingService",
    "INACTIVE_MESSAGE",
]

"""Result types produced by the matching flow."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from django.utils import timezone

from orders.models import Order, OrderItem
from services.routing import RouteEstimate


@dataclass
class TravelTime:
    duration: str
    duration_value: int
    distance: str
    distance_value: float
    estimated_arrival_time: datetime

    @classmethod
    def from_estimate(cls, estimate: RouteEstimate, now: Optional[datetime] = None) -> "TravelTime":
        now = now or timezone.now()
        return cls(
            duration=estimate.duration,
            duration_value=estimate.duration_value,
            distance=estimate.distance,
            distance_value=estimate.distance_value,
            estimated_arrival_time=now + timedelta(seconds=estimate.duration_value),
        )


@dataclass
class Candidate:
    """An eligible order offered to a driver. Built per request, never stored."""
    order: Order
    distance: float                        # great-circle km
    travel_time: Optional[TravelTime] = None
    items: List[OrderItem] = field(default_factory=list)

    @property
    def destination(self) -> Tuple[float, float]:
        return self.order.destination


@dataclass
class NearbyOrdersResult:
    orders: List[Candidate]
    driver_location: Optional[Tuple[float, float]]
    search_radius: float
    message: str = ""


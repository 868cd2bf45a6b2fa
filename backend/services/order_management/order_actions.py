"""
Driver decisions on orders and the delivery lifecycle that follows.

This module handles:
    - Accepting an order (race-safe conditional assignment)
    - Rejecting an order (idempotent exclusion for that driver)
    - Moving an assigned order forward through its delivery statuses
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from drivers.models import DriverProfile
from orders.models import Order, DriverOrderRejection
from .exceptions import (
    DriverNotFoundError,
    OrderNotFoundError,
    AlreadyAssignedError,
    InvalidStatusTransitionError,
)

logger = logging.getLogger(__name__)

ACTIVE_DELIVERY_STATUSES = ('assigned', 'picked_up', 'out_for_delivery')


@dataclass
class OrderActionResult:
    """Result object for order operations."""
    success: bool
    order_id: str
    action: str
    message: str = ""
    delivery_status: Optional[str] = None


def get_driver_for_user(user) -> DriverProfile:
    """Resolve the requesting user to a driver profile or raise DriverNotFoundError."""
    user_id = getattr(user, "id", user)
    driver = DriverProfile.objects.for_user(user_id) if user_id is not None else None
    if driver is None:
        raise DriverNotFoundError()
    return driver


# ===================== Driver Decisions =====================

@transaction.atomic
def accept_order(driver_user, order_id) -> OrderActionResult:
    """
    Assign an order to the requesting driver.

    Exactly one of several concurrent accepts for the same order succeeds: the
    assignment is a single UPDATE conditioned on the order still being unassigned.

    Args:
        driver_user: User model instance (driver)
        order_id: ID of the order to accept

    Returns:
        OrderActionResult for the accepted order

    Raises:
        DriverNotFoundError: If the user has no driver profile
        OrderNotFoundError: If the order does not exist
        AlreadyAssignedError: If any driver already holds the order
    """
    driver = get_driver_for_user(driver_user)

    updated = Order.objects.assign_if_unassigned(order_id, driver.id)
    if updated == 0:
        if not Order.objects.filter(pk=order_id).exists():
            raise OrderNotFoundError()
        logger.info("Driver %s lost order %s: already assigned", driver.id, order_id)
        raise AlreadyAssignedError()

    logger.info("Order %s assigned to driver %s", order_id, driver.id)

    # Other drivers drop the order from their lists once the assignment is durable
    transaction.on_commit(lambda: _broadcast_assignment(order_id, driver.id))

    return OrderActionResult(
        success=True,
        order_id=str(order_id),
        action="accept",
        message="Order accepted successfully",
        delivery_status="assigned",
    )


def reject_order(driver_user, order_id) -> OrderActionResult:
    """
    Record that the driver does not want this order.

    Repeating the call is harmless; the order itself is untouched and stays
    available to every other driver.

    Raises:
        DriverNotFoundError: If the user has no driver profile
        OrderNotFoundError: If the order does not exist
    """
    driver = get_driver_for_user(driver_user)

    if not Order.objects.filter(pk=order_id).exists():
        raise OrderNotFoundError()

    DriverOrderRejection.objects.record(driver.id, order_id)
    logger.info("Driver %s rejected order %s", driver.id, order_id)

    return OrderActionResult(
        success=True,
        order_id=str(order_id),
        action="reject",
        message="Order rejected",
    )


# ===================== Delivery Lifecycle =====================

def check_delivery_transition(current: str, new: str) -> None:
    """Only forward moves past assignment are allowed; terminal states are final."""
    ranks = Order.DELIVERY_STATUS_RANK
    if new not in ranks or new in ('pending', 'assigned'):
        raise InvalidStatusTransitionError(f"Invalid delivery status: {new}")
    if current in Order.TERMINAL_DELIVERY_STATUSES:
        raise InvalidStatusTransitionError(f"Delivery is already {current}")
    if ranks[new] <= ranks[current]:
        raise InvalidStatusTransitionError(f"Cannot change delivery status from {current} to {new}")


@transaction.atomic
def update_delivery_status(driver_user, order_id, new_status: str, delivery_time: str = "") -> OrderActionResult:
    """
    Advance the delivery status of an order assigned to the requesting driver.

    Args:
        driver_user: User model instance (driver)
        order_id: ID of the order
        new_status: picked_up, out_for_delivery, delivered or failed
        delivery_time: Optional free-text delivery time

    Returns:
        OrderActionResult with the new delivery status
    """
    driver = get_driver_for_user(driver_user)

    try:
        order = Order.objects.get(pk=order_id, assigned_driver=driver)
    except Order.DoesNotExist:
        raise OrderNotFoundError("Order not found or not assigned to you")

    check_delivery_transition(order.delivery_status, new_status)

    update_fields = {"delivery_status": new_status, "updated_at": timezone.now()}
    if delivery_time and delivery_time.strip():
        update_fields["delivery_time"] = delivery_time.strip()

    # Guard on the status we validated against so concurrent updates cannot skip a check
    updated = Order.objects.filter(
        pk=order.pk,
        assigned_driver=driver,
        delivery_status=order.delivery_status,
    ).update(**update_fields)
    if updated == 0:
        raise InvalidStatusTransitionError("Delivery status changed meanwhile. Please refresh.")

    logger.info("Order %s delivery status %s -> %s", order.pk, order.delivery_status, new_status)

    order.delivery_status = new_status
    transaction.on_commit(lambda: _notify_customer_status(order))

    return OrderActionResult(
        success=True,
        order_id=str(order.pk),
        action="delivery_status",
        message=f"Delivery status updated to {new_status}",
        delivery_status=new_status,
    )


def get_driver_orders(driver_user, scope: str = "active") -> List[Order]:
    """Orders assigned to the driver: in progress ("active") or finished ("completed")."""
    driver = get_driver_for_user(driver_user)
    statuses = ACTIVE_DELIVERY_STATUSES if scope == "active" else Order.TERMINAL_DELIVERY_STATUSES
    return list(
        Order.objects.assigned_to(driver)
        .filter(delivery_status__in=statuses)
        .select_related("customer")
        .prefetch_related("items")
    )


# ===================== Helper Functions =====================

def _broadcast_assignment(order_id, driver_id: int):
    """Queue the order_assigned broadcast; never affects the accept result."""
    try:
        from orders.tasks import broadcast_order_assigned_task
        broadcast_order_assigned_task.delay(str(order_id), driver_id)
    except Exception:
        logger.exception("Failed to queue assignment broadcast for order %s", order_id)


def _notify_customer_status(order: Order):
    try:
        from realtime.notifications import notify_customer_event
        notify_customer_event(
            'delivery_status_changed',
            order,
            f"Your order is now {order.get_delivery_status_display().lower()}."
        )
    except Exception:
        logger.exception("Failed to notify customer of delivery status for order %s", order.pk)

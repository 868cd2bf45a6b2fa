"""Celery tasks for order-related background processing."""

from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def broadcast_order_assigned_task(order_id: str, driver_id: int):
    """
    Celery task to announce an order assignment over WebSockets.

    Queued after the accept commits so drivers still showing the order can
    drop it without waiting for their next refresh.
    """
    from orders.models import Order
    from realtime.notifications import notify_order_assigned

    try:
        order = Order.objects.get(pk=order_id)
    except Order.DoesNotExist:
        logger.warning("Order %s not found for assignment broadcast", order_id)
        return False

    if order.assigned_driver_id != driver_id:
        logger.warning(
            "Order %s is held by driver %s, not %s; skipping broadcast",
            order_id, order.assigned_driver_id, driver_id
        )
        return False

    logger.info("Broadcasting assignment of order %s to driver %s", order_id, driver_id)
    return notify_order_assigned(order)

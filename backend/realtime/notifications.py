"""
Notification helpers for sending WebSocket messages to connected clients.

This module provides functions to:
- Tell every connected driver that an order has been taken
- Send delivery events to the order's customer
"""

from __future__ import annotations

import logging
from typing import Dict, Any

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

# Every connected driver joins this group
DRIVERS_GROUP = "drivers"


def notify_order_assigned(order) -> bool:
    """
    Broadcast that an order is no longer available.

    Drivers remove it from their nearby list; the customer learns a driver is on it.

    Args:
        order: Order model instance (already assigned)

    Returns:
        True if sent successfully, False otherwise
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("No channel layer available for order %s broadcast", order.pk)
        return False

    payload = {
        "type": "order_assigned",
        "order_id": str(order.pk),
        "driver_id": order.assigned_driver_id,
    }
    logger.debug("WS -> %s: %s", DRIVERS_GROUP, payload)
    async_to_sync(channel_layer.group_send)(DRIVERS_GROUP, payload)

    notify_customer_event(
        "delivery_status_changed",
        order,
        "A driver has accepted your order.",
    )
    return True


def notify_customer_event(
    event_type: str,
    order,
    message: str = "",
    extra: Dict[str, Any] = None,
) -> bool:
    """
    Send an order event to the customer through: user_<customer_id>
    
    Args:
        event_type: Handler name in consumer (delivery_status_changed)
        order: Order model instance
        message: Optional message to include
        extra: Additional payload data
    
    Returns:
        True if sent successfully, False otherwise
    """
    customer_id = order.customer_id
    if not customer_id:
        return False

    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False

    payload = {
        "type": event_type,
        "order_id": str(order.pk),
        "order_number": order.order_number,
        "delivery_status": order.delivery_status,
        **(extra or {}),
    }

    if message:
        payload["message"] = message

    logger.debug("WS -> user_%s: %s", customer_id, payload)
    async_to_sync(channel_layer.group_send)(f"user_{customer_id}", payload)

    return True

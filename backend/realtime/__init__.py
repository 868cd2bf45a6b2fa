"""
Realtime app for WebSocket notifications.

This app provides:
- WebSocket consumers for drivers and customers
- Notification helpers for order assignment and delivery status events
- JWT/Cookie authentication middleware for WebSocket connections

Usage:
    from realtime.consumers import DriverConsumer, CustomerConsumer
    from realtime.notifications import notify_order_assigned, notify_customer_event
"""

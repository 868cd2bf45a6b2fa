"""Customer WebSocket consumer: receives delivery updates for their orders."""

from .base import BaseConsumer


class CustomerConsumer(BaseConsumer):
    """Customers only listen on their personal user_<id> group."""
    pass

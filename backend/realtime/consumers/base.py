"""Shared plumbing for the marketplace WebSocket consumers."""

import logging
from typing import Dict, Any, Set

from channels.generic.websocket import AsyncJsonWebsocketConsumer

logger = logging.getLogger(__name__)

# Close code sent to unauthenticated sockets
UNAUTHORIZED_CLOSE_CODE = 4401


class BaseConsumer(AsyncJsonWebsocketConsumer):
    """
    Authenticated JSON consumer subscribed to its user's ``user_<id>`` group.

    Subclasses hook in through:
        - on_connect(): extra groups and the greeting message
        - handle_message(msg_type, data): client -> server messages
    """

    async def connect(self):
        user = self.scope.get("user")
        if user is None or user.is_anonymous:
            await self.close(code=UNAUTHORIZED_CLOSE_CODE)
            return

        self.user = user
        self.user_id = user.id
        self.role = getattr(user, "role", None)
        self.subscriptions: Set[str] = set()

        await self.accept()
        await self.subscribe(f"user_{self.user_id}")
        await self.on_connect()

    async def on_connect(self):
        await self.send_event("connection_established", user_id=self.user_id, role=self.role)

    async def disconnect(self, close_code):
        for group in list(getattr(self, "subscriptions", ())):
            try:
                await self.unsubscribe(group)
            except Exception:
                logger.exception("Failed to leave %s for user %s", group, getattr(self, "user_id", None))

    async def receive_json(self, content: Dict[str, Any], **kwargs):
        msg_type = content.get("type")
        if not msg_type:
            await self.send_error("Message type is required")
            return

        try:
            await self.handle_message(msg_type, content)
        except Exception:
            logger.exception("Error handling %s from user %s", msg_type, self.user_id)
            await self.send_error(f"Error processing {msg_type}")

    async def handle_message(self, msg_type: str, data: Dict[str, Any]):
        await self.send_error(f"Unknown message type: {msg_type}")

    # ---------------------- Groups ----------------------

    async def subscribe(self, group: str):
        await self.channel_layer.group_add(group, self.channel_name)
        self.subscriptions.add(group)

    async def unsubscribe(self, group: str):
        await self.channel_layer.group_discard(group, self.channel_name)
        self.subscriptions.discard(group)

    # ---------------------- Outgoing ----------------------

    async def send_event(self, event_type: str, **fields):
        await self.send_json({"type": event_type, **fields})

    async def send_error(self, message: str):
        await self.send_event("error", message=message)

    # ---------------------- group_send handlers ----------------------

    async def delivery_status_changed(self, event):
        """An order owned by this user moved through delivery."""
        await self.send_event(
            "delivery_status_changed",
            order_id=event.get("order_id"),
            order_number=event.get("order_number"),
            delivery_status=event.get("delivery_status"),
            message=event.get("message", ""),
        )

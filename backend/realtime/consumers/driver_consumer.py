"""Driver socket: order availability events plus status/location updates."""

import logging
from typing import Dict, Any, Optional

from channels.db import database_sync_to_async

from common.utils import is_valid_coordinate
from realtime.notifications import DRIVERS_GROUP

from .base import BaseConsumer

logger = logging.getLogger(__name__)

DRIVER_STATUSES = ("available", "busy", "offline")


class DriverConsumer(BaseConsumer):
    """
    Joins ``driver_<user_id>`` and the shared drivers group.

    Incoming:
        - driver_location_update {latitude, longitude, address?}
        - driver_status_update {status}
    Outgoing (group events):
        - order_assigned: the order left the pool, drop it from the list
    """

    async def on_connect(self):
        if self.role != "driver":
            await self.send_error("This endpoint is for drivers only")
            await self.close()
            return

        self.driver_id = await self._lookup_driver_id()

        await self.subscribe(f"driver_{self.user_id}")
        await self.subscribe(DRIVERS_GROUP)

        await self.send_event(
            "connection_established",
            user_id=self.user_id,
            role=self.role,
            message="Driver connected successfully",
        )

    async def handle_message(self, msg_type: str, data: Dict[str, Any]):
        handlers = {
            "driver_location_update": self._on_location_update,
            "driver_status_update": self._on_status_update,
        }
        handler = handlers.get(msg_type)
        if handler is None:
            await self.send_error(f"Unknown message type: {msg_type}")
            return
        await handler(data)

    async def _on_location_update(self, data: Dict[str, Any]):
        try:
            lat = float(data["latitude"])
            lon = float(data["longitude"])
        except (KeyError, TypeError, ValueError):
            await self.send_error("driver_location_update requires numeric latitude and longitude")
            return

        if not is_valid_coordinate(lat, lon):
            await self.send_error("Invalid coordinates")
            return

        if not await self._save_location(lat, lon, data.get("address") or ""):
            await self.send_error("Driver profile not found")
            return

        await self.send_event("location_updated", latitude=lat, longitude=lon)

    async def _on_status_update(self, data: Dict[str, Any]):
        status = data.get("status")
        if status not in DRIVER_STATUSES:
            await self.send_error("Invalid status. Must be: available, busy, or offline")
            return

        if not await self._save_status(status):
            await self.send_error("Driver profile not found")
            return

        await self.send_event("status_updated", status=status)

    # ---------------------- group_send handlers ----------------------

    async def order_assigned(self, event):
        await self.send_event(
            "order_assigned",
            order_id=event.get("order_id"),
            assigned_to_you=self.driver_id is not None and event.get("driver_id") == self.driver_id,
        )

    # ---------------------- Database ----------------------

    @database_sync_to_async
    def _lookup_driver_id(self) -> Optional[int]:
        from drivers.models import DriverProfile
        return DriverProfile.objects.filter(user_id=self.user_id).values_list("id", flat=True).first()

    @database_sync_to_async
    def _save_location(self, lat: float, lon: float, address: str) -> bool:
        from drivers.models import DriverProfile
        from drivers import services

        profile = DriverProfile.objects.for_user(self.user_id)
        if profile is None:
            return False
        services.update_driver_location(profile, lat, lon, address)
        logger.debug("Driver %s location -> (%s, %s)", profile.id, lat, lon)
        return True

    @database_sync_to_async
    def _save_status(self, status: str) -> bool:
        from drivers.models import DriverProfile
        from drivers import services

        profile = DriverProfile.objects.for_user(self.user_id)
        if profile is None:
            return False
        services.update_driver_status(profile, status)
        return True

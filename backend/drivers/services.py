from django.utils import timezone

from drivers.models import DriverProfile


# DRIVER STATUS UPDATE
def update_driver_status(profile: DriverProfile, new_status: str):
    """
    Update driver availability status.
    Offline drivers get an empty nearby-orders list until they come back.
    """
    profile.status = new_status
    profile.save(update_fields=["status"])
    return profile


def update_driver_location(profile: DriverProfile, lat, lon, address: str = ""):
    """
    Update driver location. Used by:
    - HTTP location endpoint
    - WebSocket driver_location_update messages
    """
    profile.current_latitude = round(float(lat), 6)
    profile.current_longitude = round(float(lon), 6)
    profile.current_address = address or f"{lat}, {lon}"
    profile.last_location_update = timezone.now()
    profile.save(update_fields=[
        "current_latitude", "current_longitude", "current_address", "last_location_update",
    ])
    return profile

from rest_framework import serializers

from drivers.models import DriverProfile
from orders.models import Order


class DriverProfileSerializer(serializers.ModelSerializer):
    """
    Full driver profile serializer
    """
    username = serializers.CharField(source="user.username", read_only=True)
    phone_number = serializers.CharField(source="user.phone_number", read_only=True)

    class Meta:
        model = DriverProfile
        fields = [
            "id",
            "username",
            "phone_number",
            "vehicle_number",
            "status",
            "is_active",
            "current_latitude",
            "current_longitude",
            "current_address",
            "max_delivery_radius",
            "last_location_update",
        ]
        read_only_fields = [
            "id", "status", "is_active", "current_latitude", "current_longitude",
            "current_address", "last_location_update",
        ]


class DriverStatusSerializer(serializers.Serializer):
    """
    Serializer for updating driver availability.
    """
    status = serializers.ChoiceField(choices=["available", "busy", "offline"])


class LocationUpdateSerializer(serializers.Serializer):
    """
    Serializer for updating driver GPS location.
    """
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    address = serializers.CharField(required=False, allow_blank=True, max_length=255)


class NearbyOrdersQuerySerializer(serializers.Serializer):
    """Query params for the nearby-orders list; radius is bounded later by the service."""
    radius = serializers.FloatField(required=False)


class OrderActionSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    action = serializers.CharField()


class DeliveryStatusSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    deliveryStatus = serializers.ChoiceField(choices=[choice for choice, _ in Order.DELIVERY_STATUS_CHOICES])
    deliveryTime = serializers.CharField(required=False, allow_blank=True, max_length=100)


class DriverOrdersQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=["active", "completed"], default="active")

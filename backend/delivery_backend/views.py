import os
import logging

import redis
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status, serializers
from channels.layers import get_channel_layer

from orders.models import Order
from orders.serializers import TravelTimeSerializer
from orders.tasks import broadcast_order_assigned_task
from services.matching import TravelTime
from services.routing import RoutingError, get_routing_client

logger = logging.getLogger(__name__)


@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """Health check endpoint for monitoring system status"""

    health_status = {
        "status": "healthy",
        "timestamp": timezone.now().isoformat(),
        "services": {}
    }

    # Database check
    try:
        Order.objects.count()
        health_status["services"]["database"] = "healthy"
    except Exception as e:
        health_status["services"]["database"] = f"unhealthy: {e}"
        health_status["status"] = "unhealthy"

    # Redis check
    try:
        redis_client = redis.Redis(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", 6379)),
            db=0,
            socket_timeout=3
        )
        redis_client.ping()
        health_status["services"]["redis"] = "healthy"
    except Exception as e:
        health_status["services"]["redis"] = f"unhealthy: {e}"
        health_status["status"] = "unhealthy"

    # Channel layer check
    try:
        channel_layer = get_channel_layer()
        if channel_layer is not None:
            health_status["services"]["channels"] = "healthy"
        else:
            health_status["services"]["channels"] = "unhealthy: no channel layer"
            health_status["status"] = "unhealthy"
    except Exception as e:
        health_status["services"]["channels"] = f"unhealthy: {e}"
        health_status["status"] = "unhealthy"

    # Celery check
    if broadcast_order_assigned_task.name:
        health_status["services"]["celery"] = "healthy"
    else:
        health_status["services"]["celery"] = "unhealthy: task not registered"
        health_status["status"] = "unhealthy"

    status_code = (
        status.HTTP_200_OK
        if health_status["status"] == "healthy"
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )

    return Response(health_status, status=status_code)


class TravelTimeQuerySerializer(serializers.Serializer):
    originLat = serializers.FloatField(min_value=-90, max_value=90)
    originLng = serializers.FloatField(min_value=-180, max_value=180)
    destLat = serializers.FloatField(min_value=-90, max_value=90)
    destLng = serializers.FloatField(min_value=-180, max_value=180)


@api_view(["GET"])
def travel_time(request):
    """
    Travel time between two points.

    GET /api/maps/travel-time/?originLat=..&originLng=..&destLat=..&destLng=..
    """
    query = TravelTimeQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return Response(
            {
                "success": False,
                "error": "invalid_coordinates",
                "message": "originLat, originLng, destLat and destLng are required",
                "details": query.errors,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    data = query.validated_data
    origin = (data["originLat"], data["originLng"])
    destination = (data["destLat"], data["destLng"])

    client = get_routing_client()
    if client is None:
        return Response(
            {"success": False, "error": "routing_failed", "message": "Travel time service is not configured"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    try:
        estimate = client.estimate(origin, destination)
    except RoutingError as e:
        logger.warning("Travel time lookup %s -> %s failed: %s", origin, destination, e)
        return Response(
            {"success": False, "error": "routing_failed", "message": "Failed to calculate travel time"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response({
        "success": True,
        "travelTime": TravelTimeSerializer(TravelTime.from_estimate(estimate)).data,
    })

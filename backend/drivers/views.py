import logging

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from drivers.models import DriverProfile
from drivers.serializers import (
    DriverProfileSerializer,
    DriverStatusSerializer,
    LocationUpdateSerializer,
    NearbyOrdersQuerySerializer,
    OrderActionSerializer,
    DeliveryStatusSerializer,
    DriverOrdersQuerySerializer,
)
from orders.serializers import CandidateSerializer, OrderSerializer
from services.matching import MatchingService
from services.order_management import (
    MatchingError,
    update_delivery_status,
    get_driver_orders,
)

from drivers import services

logger = logging.getLogger(__name__)


def error_response(exc: MatchingError) -> Response:
    """Render a matching error as {success, error, message} with its HTTP status."""
    return Response(
        {
            "success": False,
            "error": exc.error_code,
            "message": exc.message,
        },
        status=exc.status_code,
    )


def internal_error_response(message: str, exc: Exception) -> Response:
    return Response(
        {
            "success": False,
            "error": "internal_error",
            "message": message,
            "details": str(exc),
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# Utility: Ensure request.user has a driver profile
def require_driver(user):
    try:
        profile = user.driver_profile
        return True, profile
    except DriverProfile.DoesNotExist:
        return False, Response(
            {"success": False, "error": "driver_not_found", "message": "Driver not found"},
            status=status.HTTP_404_NOT_FOUND,
        )


class DriverProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ok, profile = require_driver(request.user)
        if ok is False:
            return profile  # Response object

        serializer = DriverProfileSerializer(profile)
        return Response(serializer.data)

    def post(self, request):
        ok, profile = require_driver(request.user)
        if ok is False:
            return profile

        serializer = DriverProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        return Response(serializer.data, status=200)


class DriverStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ok, profile = require_driver(request.user)
        if ok is False:
            return profile

        return Response({"status": profile.status, "is_active": profile.is_active})

    def put(self, request):
        ok, profile = require_driver(request.user)
        if ok is False:
            return profile

        serializer = DriverStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data["status"]

        services.update_driver_status(profile, new_status)

        return Response({
            "success": True,
            "message": f"Driver status updated to {new_status}",
            "status": new_status
        })


class DriverLocationUpdateView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ok, profile = require_driver(request.user)
        if ok is False:
            return profile

        location = profile.location
        return Response({
            "latitude": location[0] if location else None,
            "longitude": location[1] if location else None,
            "address": profile.current_address,
            "last_updated": profile.last_location_update,
            "status": profile.status,
        })

    def post(self, request):
        ok, profile = require_driver(request.user)
        if ok is False:
            return profile

        serializer = LocationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        lat = serializer.validated_data["latitude"]
        lon = serializer.validated_data["longitude"]
        address = serializer.validated_data.get("address", "")

        services.update_driver_location(profile, lat, lon, address)

        return Response({
            "success": True,
            "message": "Driver location updated successfully",
            "location": {
                "latitude": lat,
                "longitude": lon,
                "address": profile.current_address,
            },
        })


class NearbyOrdersView(APIView):
    """
    GET: candidate orders near the driver, nearest first.
    POST: accept or reject one of them.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = NearbyOrdersQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            result = MatchingService.from_settings().get_nearby_orders(
                request.user, query.validated_data.get("radius")
            )
        except MatchingError as e:
            return error_response(e)
        except Exception as e:
            logger.exception("Error fetching nearby orders for user %s", request.user.id)
            return internal_error_response("Failed to fetch nearby orders", e)

        location = result.driver_location
        payload = {
            "success": True,
            "orders": CandidateSerializer(result.orders, many=True).data,
            "driverLocation": {
                "latitude": location[0],
                "longitude": location[1],
            } if location else None,
            "searchRadius": result.search_radius,
            "totalOrders": len(result.orders),
        }
        if result.message:
            payload["message"] = result.message
        return Response(payload)

    def post(self, request):
        serializer = OrderActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order_id = serializer.validated_data["orderId"]
        action = serializer.validated_data["action"]

        try:
            result = MatchingService.from_settings().handle_order_action(request.user, order_id, action)
        except MatchingError as e:
            return error_response(e)

        return Response({
            "success": True,
            "message": result.message,
            "orderId": result.order_id,
        })


class DriverOrdersView(APIView):
    """Orders assigned to the driver (?status=active|completed)."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = DriverOrdersQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            orders = get_driver_orders(request.user, query.validated_data["status"])
        except MatchingError as e:
            return error_response(e)

        return Response({
            "success": True,
            "orders": OrderSerializer(orders, many=True).data,
            "count": len(orders),
        })


class DeliveryStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = DeliveryStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = update_delivery_status(
                request.user,
                serializer.validated_data["orderId"],
                serializer.validated_data["deliveryStatus"],
                serializer.validated_data.get("deliveryTime", ""),
            )
        except MatchingError as e:
            return error_response(e)

        return Response({
            "success": True,
            "message": result.message,
            "deliveryStatus": result.delivery_status,
        })

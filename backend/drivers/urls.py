from django.urls import path
from .views import (
    DriverProfileView,
    DriverStatusView,
    DriverLocationUpdateView,
    NearbyOrdersView,
    DriverOrdersView,
    DeliveryStatusView,
)

urlpatterns = [
    path("profile/", DriverProfileView.as_view(), name="driver-profile"),
    path("status/", DriverStatusView.as_view(), name="driver-status"),
    path("location/", DriverLocationUpdateView.as_view(), name="driver-location"),
    path("nearby-orders/", NearbyOrdersView.as_view(), name="driver-nearby-orders"),
    path("orders/", DriverOrdersView.as_view(), name="driver-orders"),
    path("delivery-status/", DeliveryStatusView.as_view(), name="driver-delivery-status"),
]

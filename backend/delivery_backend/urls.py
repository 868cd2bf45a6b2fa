from django.contrib import admin
from django.urls import path, include

from .views import health_check, travel_time

urlpatterns = [
    path('admin/', admin.site.urls),
    path("health/", health_check), # Health check endpoint

    # Authentication endpoints (register, login, refresh)
    path('api/auth/', include('accounts.urls')),

    # Driver APIs (profile, status, location, nearby orders, deliveries)
    path('api/driver/', include('drivers.urls')),

    # Standalone travel-time lookup
    path('api/maps/travel-time/', travel_time, name='maps-travel-time'),
]

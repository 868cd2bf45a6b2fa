from typing import Optional, Tuple

from django.db import models
from django.utils import timezone
from django.conf import settings

User = settings.AUTH_USER_MODEL


class DriverProfileManager(models.Manager):

    def for_user(self, user_id) -> Optional["DriverProfile"]:
        """Resolve the driver profile behind a user id, or None."""
        return self.select_related("user").filter(user_id=user_id).first()


class DriverProfile(models.Model):
    """Driver-specific details, availability status and last known location"""
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('busy', 'Busy'),
        ('offline', 'Offline'),
    ]
    
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='driver_profile')
    
    # Vehicle details
    vehicle_number = models.CharField(max_length=20, blank=True)
    
    # Status & location
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='offline')
    is_active = models.BooleanField(default=True)
    current_latitude = models.DecimalField(max_digits=10, decimal_places=6, null=True, blank=True)
    current_longitude = models.DecimalField(max_digits=10, decimal_places=6, null=True, blank=True)
    current_address = models.CharField(max_length=255, blank=True)
    last_location_update = models.DateTimeField(default=timezone.now)

    # Kilometres; used when a nearby-orders request does not pass a radius
    max_delivery_radius = models.PositiveIntegerField(default=10)

    objects = DriverProfileManager()
    
    class Meta:
        db_table = 'drivers'
        
    def __str__(self):
        return f"{self.user.username} - {self.vehicle_number}"

    @property
    def has_location(self) -> bool:
        return self.current_latitude is not None and self.current_longitude is not None

    @property
    def location(self) -> Optional[Tuple[float, float]]:
        if not self.has_location:
            return None
        return float(self.current_latitude), float(self.current_longitude)

    @property
    def accepts_orders(self) -> bool:
        """Active drivers that are not offline may browse orders."""
        return self.is_active and self.status != 'offline'

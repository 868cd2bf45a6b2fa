import uuid

from django.db import models
from django.db.models import Exists, OuterRef
from django.conf import settings
from django.utils import timezone


class OrderQuerySet(models.QuerySet):

    def unassigned_pending_with_coordinates(self):
        """Orders nobody has taken yet that can be located on a map."""
        return self.filter(
            assigned_driver__isnull=True,
            delivery_status='pending',
            shipping_latitude__isnull=False,
            shipping_longitude__isnull=False,
        ).exclude(status__in=Order.CLOSED_STATUSES)

    def not_rejected_by(self, driver):
        """Exclude orders this driver has rejected (NOT EXISTS subquery)."""
        rejections = DriverOrderRejection.objects.filter(driver=driver, order=OuterRef('pk'))
        return self.filter(~Exists(rejections))

    def within_box(self, min_lat, max_lat, min_lon, max_lon):
        return self.filter(
            shipping_latitude__gte=round(min_lat, 6),
            shipping_latitude__lte=round(max_lat, 6),
            shipping_longitude__gte=round(min_lon, 6),
            shipping_longitude__lte=round(max_lon, 6),
        )

    def assigned_to(self, driver):
        return self.filter(assigned_driver=driver)

    def assign_if_unassigned(self, order_id, driver_id) -> int:
        """
        Atomically assign an order to a driver.

        Single UPDATE guarded by ``assigned_driver IS NULL``; returns the number
        of rows changed (0 means someone else got it or the order is missing).
        """
        return self.filter(pk=order_id, assigned_driver__isnull=True).update(
            assigned_driver_id=driver_id,
            delivery_status='assigned',
            updated_at=timezone.now(),
        )


OrderManager = models.Manager.from_queryset(OrderQuerySet)


class Order(models.Model):
    """Customer order and its delivery lifecycle"""

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('confirmed', 'Confirmed'),
        ('processing', 'Processing'),
        ('cancelled', 'Cancelled'),
        ('delivered', 'Delivered'),
    ]
    CLOSED_STATUSES = ('cancelled', 'delivered')

    DELIVERY_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('assigned', 'Assigned'),
        ('picked_up', 'Picked Up'),
        ('out_for_delivery', 'Out for Delivery'),
        ('delivered', 'Delivered'),
        ('failed', 'Failed'),
    ]
    # Position in the pending -> assigned -> picked_up -> out_for_delivery -> delivered|failed chain
    DELIVERY_STATUS_RANK = {
        'pending': 0,
        'assigned': 1,
        'picked_up': 2,
        'out_for_delivery': 3,
        'delivered': 4,
        'failed': 4,
    }
    TERMINAL_DELIVERY_STATUSES = ('delivered', 'failed')

    PAYMENT_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('refunded', 'Refunded'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=50, unique=True)

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    delivery_status = models.CharField(max_length=20, choices=DELIVERY_STATUS_CHOICES, default='pending')
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default='pending')

    # At most one driver; written only through assign_if_unassigned
    assigned_driver = models.ForeignKey(
        'drivers.DriverProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_orders'
    )

    # Shipping destination
    phone = models.CharField(max_length=20, blank=True)
    shipping_first_name = models.CharField(max_length=100, blank=True)
    shipping_address1 = models.CharField(max_length=255, blank=True)
    shipping_address2 = models.CharField(max_length=255, blank=True)
    shipping_city = models.CharField(max_length=100, blank=True)
    shipping_state = models.CharField(max_length=100, blank=True)
    shipping_postal_code = models.CharField(max_length=20, blank=True)
    shipping_latitude = models.DecimalField(max_digits=10, decimal_places=6, null=True, blank=True)
    shipping_longitude = models.DecimalField(max_digits=10, decimal_places=6, null=True, blank=True)

    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    notes = models.TextField(blank=True)
    delivery_instructions = models.TextField(blank=True)
    delivery_time = models.CharField(max_length=100, blank=True)

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OrderManager()

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {self.order_number} - {self.delivery_status}"

    @property
    def destination(self):
        if self.shipping_latitude is None or self.shipping_longitude is None:
            return None
        return float(self.shipping_latitude), float(self.shipping_longitude)


class OrderItem(models.Model):
    """Line item owned by an order (read-only for the matching flow)."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"


class DriverOrderRejectionManager(models.Manager):

    def record(self, driver_id, order_id) -> None:
        """Insert a rejection, silently keeping the existing row on duplicates."""
        self.bulk_create(
            [self.model(driver_id=driver_id, order_id=order_id)],
            ignore_conflicts=True,
        )


class DriverOrderRejection(models.Model):
    """Remembers that a driver declined an order so it is never offered to them again."""

    driver = models.ForeignKey(
        'drivers.DriverProfile',
        on_delete=models.CASCADE,
        related_name='order_rejections'
    )
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='rejections')
    created_at = models.DateTimeField(auto_now_add=True)

    objects = DriverOrderRejectionManager()

    class Meta:
        db_table = 'driver_order_rejections'
        constraints = [
            models.UniqueConstraint(
                fields=['driver', 'order'],
                name='unique_driver_order_rejection'
            )
        ]

    def __str__(self):
        return f"Driver {self.driver_id} rejected order {self.order_id}"

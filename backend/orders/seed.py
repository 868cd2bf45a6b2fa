"""
San Francisco Bay Area driver/order scenario.

Driver 1 sits downtown SF (radius 25km), Driver 2 in Oakland (radius 20km);
five pending orders are spread so that each driver sees a different subset and
TEST-005 (San Jose) is out of reach for both.
"""

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Dict

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from drivers.models import DriverProfile
from orders.models import Order, OrderItem

User = get_user_model()

TEST_PREFIX = "TEST-"

DRIVERS = [
    # username, vehicle, lat, lon, address, radius km
    ("test_driver_1", "TEST001", "37.7749", "-122.4194", "San Francisco, CA", 25),
    ("test_driver_2", "TEST002", "37.8044", "-122.2712", "Oakland, CA", 20),
]

CUSTOMERS = [
    ("test_customer_1", "555-0001"),
    ("test_customer_2", "555-0002"),
    ("test_customer_3", "555-0003"),
]

ORDERS = [
    # number, customer index, lat, lon, street, city, postal code, instructions
    ("TEST-001", 0, "37.7849", "-122.4094", "123 Mission St", "San Francisco", "94103", "Ring doorbell twice"),
    ("TEST-002", 1, "37.8144", "-122.2612", "456 Broadway", "Oakland", "94607", "Leave at front desk"),
    ("TEST-003", 2, "37.7949", "-122.3794", "789 Market St", "San Francisco", "94105", ""),
    ("TEST-004", 0, "37.8699", "-122.2585", "321 Telegraph Ave", "Berkeley", "94704", ""),
    ("TEST-005", 1, "37.3541", "-121.9552", "654 Santa Clara St", "San Jose", "95113", ""),
]


@dataclass
class SeedData:
    drivers: Dict[str, DriverProfile]
    orders: Dict[str, Order]


def _user(username: str, role: str, phone: str):
    user, created = User.objects.get_or_create(
        username=username,
        defaults={
            "role": role,
            "phone_number": phone,
            "email": f"{username}@test.com",
        },
    )
    if created:
        user.set_password("test1234")
        user.save(update_fields=["password"])
    return user


@transaction.atomic
def create_driver_test_data() -> SeedData:
    """Create (or refresh) the scenario; safe to run repeatedly."""
    cleanup_driver_test_data()

    drivers = {}
    for index, (username, vehicle, lat, lon, address, radius) in enumerate(DRIVERS, start=1):
        user = _user(username, "driver", f"555-100{index}")
        profile, _ = DriverProfile.objects.update_or_create(
            user=user,
            defaults={
                "vehicle_number": vehicle,
                "status": "available",
                "is_active": True,
                "current_latitude": Decimal(lat),
                "current_longitude": Decimal(lon),
                "current_address": address,
                "max_delivery_radius": radius,
                "last_location_update": timezone.now(),
            },
        )
        drivers[username] = profile

    customers = [_user(username, "customer", phone) for username, phone in CUSTOMERS]

    now = timezone.now()
    orders = {}
    for position, (number, customer_index, lat, lon, street, city, postal, instructions) in enumerate(ORDERS):
        customer = customers[customer_index]
        order = Order.objects.create(
            order_number=number,
            customer=customer,
            phone=customer.phone_number,
            status="confirmed",
            payment_status="paid",
            delivery_status="pending",
            total_amount=Decimal("30.99"),
            shipping_first_name="Test",
            shipping_address1=street,
            shipping_city=city,
            shipping_state="CA",
            shipping_postal_code=postal,
            shipping_latitude=Decimal(lat),
            shipping_longitude=Decimal(lon),
            delivery_instructions=instructions,
            created_at=now - timedelta(minutes=position),
        )
        OrderItem.objects.create(
            order=order,
            product_name="Test Product",
            quantity=1,
            price=Decimal("25.99"),
            total_price=Decimal("25.99"),
        )
        orders[number] = order

    return SeedData(drivers=drivers, orders=orders)


@transaction.atomic
def cleanup_driver_test_data() -> int:
    """Delete scenario orders (items and rejections cascade). Returns orders removed."""
    deleted, _ = Order.objects.filter(order_number__startswith=TEST_PREFIX).delete()
    return deleted

from decimal import Decimal

from django.contrib.auth import get_user_model

from drivers.models import DriverProfile
from orders.models import Order, OrderItem

User = get_user_model()

# Downtown San Francisco
SF_LAT = 37.7749
SF_LON = -122.4194


def make_user(username, role='customer'):
	return User.objects.create_user(
		username=username,
		password='pass1234',
		role=role,
		phone_number='555-0100'
	)


def make_driver(username, lat=SF_LAT, lon=SF_LON, status='available', **extra):
	user = make_user(username, role='driver')
	return DriverProfile.objects.create(
		user=user,
		vehicle_number=username.upper(),
		status=status,
		current_latitude=None if lat is None else Decimal(str(lat)),
		current_longitude=None if lon is None else Decimal(str(lon)),
		**extra
	)


def make_order(number, lat, lon, customer=None, status='confirmed', with_item=True, **extra):
	order = Order.objects.create(
		order_number=number,
		customer=customer,
		status=status,
		shipping_first_name='Test',
		shipping_address1='1 Test St',
		shipping_city='San Francisco',
		shipping_latitude=None if lat is None else Decimal(str(lat)),
		shipping_longitude=None if lon is None else Decimal(str(lon)),
		total_amount=Decimal('19.99'),
		**extra
	)
	if with_item:
		OrderItem.objects.create(
			order=order,
			product_name='Groceries',
			quantity=2,
			price=Decimal('9.99'),
			total_price=Decimal('19.98')
		)
	return order

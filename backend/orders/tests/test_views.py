import uuid
from io import StringIO
from unittest.mock import MagicMock, patch

from django.core.management import call_command
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from orders.models import Order, DriverOrderRejection
from orders.seed import create_driver_test_data
from services.matching import MatchingService, INACTIVE_MESSAGE
from services.routing import RouteEstimate, RoutingError

from .helpers import make_driver, make_order, make_user

NEARBY_URL = '/api/driver/nearby-orders/'


def fixed_estimate(self, origin, destination):
	return RouteEstimate('6 mins', 360, '0.9 mi', 1450.0)


def failing_estimate(self, origin, destination):
	raise RoutingError('down')


@override_settings(ROUTING={'BACKEND': ''})
class NearbyOrdersListViewTests(TestCase):
	def setUp(self):
		self.client = APIClient()
		self.data = create_driver_test_data()
		self.driver = self.data.drivers['test_driver_1']
		self.client.force_authenticate(user=self.driver.user)

	def test_lists_orders_nearest_first(self):
		response = self.client.get(NEARBY_URL)

		self.assertEqual(response.status_code, 200)
		body = response.json()
		self.assertTrue(body['success'])
		self.assertEqual(
			[o['orderNumber'] for o in body['orders']],
			['TEST-001', 'TEST-003', 'TEST-002', 'TEST-004']
		)
		self.assertEqual(body['totalOrders'], 4)
		self.assertEqual(body['searchRadius'], 25)
		self.assertEqual(body['driverLocation'], {'latitude': 37.7749, 'longitude': -122.4194})

	def test_order_payload_shape(self):
		first = self.client.get(NEARBY_URL).json()['orders'][0]

		self.assertEqual(first['id'], str(self.data.orders['TEST-001'].id))
		self.assertEqual(first['distance'], 1.42)
		self.assertIsNone(first['travelTime'])
		self.assertEqual(first['deliveryStatus'], 'pending')
		self.assertEqual(first['items'][0]['productName'], 'Test Product')
		self.assertEqual(first['deliveryAddress']['street'], '123 Mission St')
		self.assertEqual(first['deliveryInstructions'], 'Ring doorbell twice')

	def test_radius_query_param(self):
		body = self.client.get(NEARBY_URL, {'radius': '10'}).json()

		self.assertEqual(body['searchRadius'], 10)
		self.assertEqual([o['orderNumber'] for o in body['orders']], ['TEST-001', 'TEST-003'])

	def test_radius_is_clamped(self):
		body = self.client.get(NEARBY_URL, {'radius': '500'}).json()

		self.assertEqual(body['searchRadius'], 50)

	def test_non_numeric_radius(self):
		response = self.client.get(NEARBY_URL, {'radius': 'far'})

		self.assertEqual(response.status_code, 400)

	def test_offline_driver(self):
		self.driver.status = 'offline'
		self.driver.save(update_fields=['status'])

		response = self.client.get(NEARBY_URL)

		self.assertEqual(response.status_code, 200)
		body = response.json()
		self.assertEqual(body['orders'], [])
		self.assertEqual(body['totalOrders'], 0)
		self.assertEqual(body['message'], INACTIVE_MESSAGE)

	def test_driver_without_location(self):
		self.driver.current_latitude = None
		self.driver.current_longitude = None
		self.driver.save(update_fields=['current_latitude', 'current_longitude'])

		response = self.client.get(NEARBY_URL)

		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json()['error'], 'location_unavailable')
		self.assertFalse(response.json()['success'])

	def test_non_driver(self):
		self.client.force_authenticate(user=make_user('shopper'))

		response = self.client.get(NEARBY_URL)

		self.assertEqual(response.status_code, 404)
		self.assertEqual(response.json()['error'], 'driver_not_found')

	def test_requires_authentication(self):
		self.client.force_authenticate(user=None)

		response = self.client.get(NEARBY_URL)

		self.assertEqual(response.status_code, 401)

	@patch.object(MatchingService, 'get_nearby_orders', side_effect=RuntimeError('db exploded'))
	def test_unexpected_error(self, mock_get):
		with self.assertLogs('drivers.views', level='ERROR'):
			response = self.client.get(NEARBY_URL)

		self.assertEqual(response.status_code, 500)
		self.assertEqual(response.json()['error'], 'internal_error')

	@override_settings(ROUTING={'BACKEND': 'osrm', 'OSRM_BASE_URL': 'http://osrm.local'})
	@patch('services.routing.osrm.OSRMClient.estimate', new=fixed_estimate)
	def test_travel_time_included_when_routing_enabled(self):
		first = self.client.get(NEARBY_URL).json()['orders'][0]

		self.assertEqual(first['travelTime']['duration'], '6 mins')
		self.assertEqual(first['travelTime']['durationValue'], 360)
		self.assertIn('estimatedArrivalTime', first['travelTime'])

	@override_settings(ROUTING={'BACKEND': 'osrm', 'OSRM_BASE_URL': 'http://osrm.local'})
	@patch('services.routing.osrm.OSRMClient.estimate', new=failing_estimate)
	def test_routing_outage_still_lists_orders(self):
		response = self.client.get(NEARBY_URL)

		self.assertEqual(response.status_code, 200)
		orders = response.json()['orders']
		self.assertEqual(len(orders), 4)
		self.assertTrue(all(o['travelTime'] is None for o in orders))


class NearbyOrdersActionViewTests(TestCase):
	def setUp(self):
		self.client = APIClient()
		self.driver_one = make_driver('driver_one')
		self.driver_two = make_driver('driver_two')
		self.order = make_order('ORD-1', 37.7849, -122.4094)
		self.client.force_authenticate(user=self.driver_one.user)

	def post(self, order_id, action):
		return self.client.post(NEARBY_URL, {'orderId': str(order_id), 'action': action}, format='json')

	def test_accept(self):
		response = self.post(self.order.id, 'accept')

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json(), {
			'success': True,
			'message': 'Order accepted successfully',
			'orderId': str(self.order.id),
		})
		self.order.refresh_from_db()
		self.assertEqual(self.order.assigned_driver, self.driver_one)

	def test_accept_conflict(self):
		self.post(self.order.id, 'accept')
		self.client.force_authenticate(user=self.driver_two.user)

		response = self.post(self.order.id, 'accept')

		self.assertEqual(response.status_code, 409)
		self.assertEqual(response.json()['error'], 'already_assigned')
		self.assertFalse(response.json()['success'])

	def test_reject(self):
		response = self.post(self.order.id, 'reject')

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json()['message'], 'Order rejected')
		self.assertTrue(DriverOrderRejection.objects.filter(driver=self.driver_one, order=self.order).exists())

		listing = self.client.get(NEARBY_URL).json()
		self.assertEqual(listing['orders'], [])

	def test_invalid_action(self):
		response = self.post(self.order.id, 'snooze')

		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json()['error'], 'invalid_action')

	def test_unknown_order(self):
		response = self.post(uuid.uuid4(), 'accept')

		self.assertEqual(response.status_code, 404)
		self.assertEqual(response.json()['error'], 'order_not_found')

	def test_missing_fields(self):
		response = self.client.post(NEARBY_URL, {'action': 'accept'}, format='json')

		self.assertEqual(response.status_code, 400)
		self.assertIn('orderId', response.json())


class DeliveryViewsTests(TestCase):
	def setUp(self):
		self.client = APIClient()
		self.driver = make_driver('driver_one')
		self.order = make_order('ORD-1', 37.7849, -122.4094)
		Order.objects.assign_if_unassigned(self.order.id, self.driver.id)
		self.client.force_authenticate(user=self.driver.user)

	def test_update_delivery_status(self):
		response = self.client.put(
			'/api/driver/delivery-status/',
			{'orderId': str(self.order.id), 'deliveryStatus': 'picked_up'},
			format='json'
		)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json()['deliveryStatus'], 'picked_up')

	def test_backward_delivery_status(self):
		Order.objects.filter(pk=self.order.pk).update(delivery_status='out_for_delivery')

		response = self.client.put(
			'/api/driver/delivery-status/',
			{'orderId': str(self.order.id), 'deliveryStatus': 'picked_up'},
			format='json'
		)

		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json()['error'], 'invalid_status_transition')

	def test_driver_orders(self):
		active = self.client.get('/api/driver/orders/').json()
		completed = self.client.get('/api/driver/orders/', {'status': 'completed'}).json()

		self.assertEqual([o['orderNumber'] for o in active['orders']], ['ORD-1'])
		self.assertEqual(completed['orders'], [])


class TravelTimeViewTests(TestCase):
	URL = '/api/maps/travel-time/'
	PARAMS = {'originLat': '37.7749', 'originLng': '-122.4194', 'destLat': '37.7849', 'destLng': '-122.4094'}

	def setUp(self):
		self.client = APIClient()
		self.client.force_authenticate(user=make_user('anyone'))

	@patch('delivery_backend.views.get_routing_client')
	def test_returns_travel_time(self, mock_get_client):
		mock_get_client.return_value.estimate.return_value = RouteEstimate('6 mins', 360, '0.9 mi', 1450.0)

		response = self.client.get(self.URL, self.PARAMS)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json()['travelTime']['distance'], '0.9 mi')
		mock_get_client.return_value.estimate.assert_called_once_with((37.7749, -122.4194), (37.7849, -122.4094))

	@patch('delivery_backend.views.get_routing_client')
	def test_routing_failure(self, mock_get_client):
		mock_get_client.return_value.estimate.side_effect = RoutingError('OVER_QUERY_LIMIT')

		response = self.client.get(self.URL, self.PARAMS)

		self.assertEqual(response.status_code, 500)
		self.assertEqual(response.json()['error'], 'routing_failed')

	@patch('delivery_backend.views.get_routing_client', return_value=None)
	def test_routing_disabled(self, mock_get_client):
		response = self.client.get(self.URL, self.PARAMS)

		self.assertEqual(response.status_code, 500)

	def test_missing_coordinates(self):
		response = self.client.get(self.URL, {'originLat': '37.7749'})

		self.assertEqual(response.status_code, 400)


class HealthCheckTests(TestCase):
	@patch('delivery_backend.views.redis.Redis')
	def test_healthy(self, mock_redis):
		mock_redis.return_value = MagicMock()

		response = self.client.get('/health/')

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json()['services']['database'], 'healthy')


class SeedCommandTests(TestCase):
	def test_creates_and_cleans_up_scenario(self):
		out = StringIO()
		call_command('seed_driver_test_data', stdout=out)

		self.assertEqual(Order.objects.filter(order_number__startswith='TEST-').count(), 5)
		self.assertIn('Created 2 test drivers and 5 test orders', out.getvalue())

		# Re-running replaces rather than duplicates
		call_command('seed_driver_test_data', stdout=StringIO())
		self.assertEqual(Order.objects.filter(order_number__startswith='TEST-').count(), 5)

		call_command('seed_driver_test_data', cleanup=True, stdout=StringIO())
		self.assertFalse(Order.objects.filter(order_number__startswith='TEST-').exists())

from django.test import TestCase
from rest_framework.test import APIClient

from drivers.models import DriverProfile
from orders.tests.helpers import make_driver, make_user


class DriverStatusViewTests(TestCase):
	def setUp(self):
		self.client = APIClient()
		self.driver = make_driver('driver_one', status='offline')
		self.client.force_authenticate(user=self.driver.user)

	def test_get_status(self):
		response = self.client.get('/api/driver/status/')

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json(), {'status': 'offline', 'is_active': True})

	def test_go_online(self):
		response = self.client.put('/api/driver/status/', {'status': 'available'}, format='json')

		self.assertEqual(response.status_code, 200)
		self.driver.refresh_from_db()
		self.assertEqual(self.driver.status, 'available')
		self.assertTrue(self.driver.accepts_orders)

	def test_invalid_status(self):
		response = self.client.put('/api/driver/status/', {'status': 'napping'}, format='json')

		self.assertEqual(response.status_code, 400)
		self.driver.refresh_from_db()
		self.assertEqual(self.driver.status, 'offline')

	def test_customer_has_no_driver_status(self):
		self.client.force_authenticate(user=make_user('customer'))

		response = self.client.get('/api/driver/status/')

		self.assertEqual(response.status_code, 404)
		self.assertEqual(response.json()['error'], 'driver_not_found')


class DriverLocationViewTests(TestCase):
	def setUp(self):
		self.client = APIClient()
		self.driver = make_driver('driver_one', lat=None, lon=None)
		self.client.force_authenticate(user=self.driver.user)

	def test_location_starts_empty(self):
		response = self.client.get('/api/driver/location/')

		self.assertEqual(response.status_code, 200)
		self.assertIsNone(response.json()['latitude'])

	def test_update_location(self):
		response = self.client.post(
			'/api/driver/location/',
			{'latitude': 37.8044, 'longitude': -122.2712, 'address': 'Oakland, CA'},
			format='json'
		)

		self.assertEqual(response.status_code, 200)
		self.driver.refresh_from_db()
		self.assertEqual(self.driver.location, (37.8044, -122.2712))
		self.assertEqual(self.driver.current_address, 'Oakland, CA')

	def test_update_without_address_uses_coordinates(self):
		self.client.post('/api/driver/location/', {'latitude': 37.5, 'longitude': -122.25}, format='json')

		self.driver.refresh_from_db()
		self.assertEqual(self.driver.current_address, '37.5, -122.25')

	def test_out_of_range_coordinates(self):
		response = self.client.post('/api/driver/location/', {'latitude': 91, 'longitude': 0}, format='json')

		self.assertEqual(response.status_code, 400)
		self.driver.refresh_from_db()
		self.assertFalse(self.driver.has_location)


class DriverProfileViewTests(TestCase):
	def setUp(self):
		self.client = APIClient()
		self.driver = make_driver('driver_one')
		self.client.force_authenticate(user=self.driver.user)

	def test_get_profile(self):
		body = self.client.get('/api/driver/profile/').json()

		self.assertEqual(body['username'], 'driver_one')
		self.assertEqual(body['max_delivery_radius'], 10)

	def test_update_delivery_radius(self):
		response = self.client.post('/api/driver/profile/', {'max_delivery_radius': 15}, format='json')

		self.assertEqual(response.status_code, 200)
		self.assertEqual(DriverProfile.objects.get(pk=self.driver.pk).max_delivery_radius, 15)

	def test_status_is_read_only_here(self):
		self.client.post('/api/driver/profile/', {'status': 'offline'}, format='json')

		self.assertEqual(DriverProfile.objects.get(pk=self.driver.pk).status, 'available')

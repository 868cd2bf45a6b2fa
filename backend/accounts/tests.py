from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import User
from drivers.models import DriverProfile


class AuthFlowTests(TestCase):
	def setUp(self):
		self.client = APIClient()

	def register(self, **overrides):
		payload = {
			'username': 'jane',
			'email': 'jane@example.com',
			'password': 'pass1234',
			'role': 'driver',
			'phone_number': '555-0101',
			'vehicle_number': '7ABC123',
		}
		payload.update(overrides)
		return self.client.post('/api/auth/register/', payload, format='json')

	def test_register_driver_creates_offline_profile(self):
		response = self.register()

		self.assertEqual(response.status_code, 201)
		self.assertIn('access', response.json()['tokens'])
		profile = DriverProfile.objects.get(user__username='jane')
		self.assertEqual(profile.vehicle_number, '7ABC123')
		self.assertEqual(profile.status, 'offline')

	def test_register_customer_has_no_driver_profile(self):
		response = self.register(role='customer', vehicle_number='')

		self.assertEqual(response.status_code, 201)
		self.assertFalse(DriverProfile.objects.filter(user__username='jane').exists())

	def test_duplicate_email(self):
		self.register()

		response = self.register(username='jane2')

		self.assertEqual(response.status_code, 400)
		self.assertIn('email', response.json())

	def test_login_and_use_access_token(self):
		self.register()

		login = self.client.post('/api/auth/login/', {'username': 'jane', 'password': 'pass1234'}, format='json')
		self.assertEqual(login.status_code, 200)
		access = login.json()['tokens']['access']

		self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
		response = self.client.get('/api/driver/status/')

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json()['status'], 'offline')

	def test_login_wrong_password(self):
		User.objects.create_user(username='jane', password='pass1234')

		response = self.client.post('/api/auth/login/', {'username': 'jane', 'password': 'nope'}, format='json')

		self.assertEqual(response.status_code, 400)

	def test_refresh(self):
		tokens = self.register().json()['tokens']

		response = self.client.post('/api/auth/refresh/', {'refresh': tokens['refresh']}, format='json')

		self.assertEqual(response.status_code, 200)
		self.assertIn('access', response.json())

	def test_refresh_with_garbage(self):
		response = self.client.post('/api/auth/refresh/', {'refresh': 'not-a-token'}, format='json')

		self.assertEqual(response.status_code, 401)

	def test_refresh_requires_token(self):
		response = self.client.post('/api/auth/refresh/', {}, format='json')

		self.assertEqual(response.status_code, 400)
		self.assertIn('refresh', response.json())

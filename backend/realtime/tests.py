from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.test import TransactionTestCase

from drivers.models import DriverProfile
from orders.tests.helpers import make_driver, make_user
from realtime.consumers import DriverConsumer, CustomerConsumer
from realtime.notifications import DRIVERS_GROUP


class DriverConsumerTests(TransactionTestCase):
	def setUp(self):
		self.driver = make_driver('driver_one', status='offline')
		self.user = self.driver.user

	async def connect(self, user, consumer=DriverConsumer, path='/ws/driver/'):
		communicator = WebsocketCommunicator(consumer.as_asgi(), path)
		communicator.scope['user'] = user
		connected, _ = await communicator.connect()
		self.assertTrue(connected)
		hello = await communicator.receive_json_from()
		self.assertEqual(hello['type'], 'connection_established')
		return communicator

	async def test_order_assigned_broadcast(self):
		communicator = await self.connect(self.user)

		await get_channel_layer().group_send(DRIVERS_GROUP, {
			'type': 'order_assigned',
			'order_id': 'order-1',
			'driver_id': self.driver.id,
		})
		message = await communicator.receive_json_from()

		self.assertEqual(message, {'type': 'order_assigned', 'order_id': 'order-1', 'assigned_to_you': True})
		await communicator.disconnect()

	async def test_order_taken_by_someone_else(self):
		communicator = await self.connect(self.user)

		await get_channel_layer().group_send(DRIVERS_GROUP, {
			'type': 'order_assigned',
			'order_id': 'order-2',
			'driver_id': self.driver.id + 1000,
		})
		message = await communicator.receive_json_from()

		self.assertFalse(message['assigned_to_you'])
		await communicator.disconnect()

	async def test_status_update_over_socket(self):
		communicator = await self.connect(self.user)

		await communicator.send_json_to({'type': 'driver_status_update', 'status': 'available'})
		reply = await communicator.receive_json_from()

		self.assertEqual(reply, {'type': 'status_updated', 'status': 'available'})
		await communicator.disconnect()

		profile = await DriverProfile.objects.aget(pk=self.driver.pk)
		self.assertEqual(profile.status, 'available')

	async def test_location_update_rejects_bad_coordinates(self):
		communicator = await self.connect(self.user)

		await communicator.send_json_to({'type': 'driver_location_update', 'latitude': 123, 'longitude': 0})
		reply = await communicator.receive_json_from()

		self.assertEqual(reply['type'], 'error')
		await communicator.disconnect()

	async def test_unknown_message_type(self):
		communicator = await self.connect(self.user)

		await communicator.send_json_to({'type': 'dance'})
		reply = await communicator.receive_json_from()

		self.assertEqual(reply, {'type': 'error', 'message': 'Unknown message type: dance'})
		await communicator.disconnect()


class CustomerConsumerTests(TransactionTestCase):
	def setUp(self):
		self.customer = make_user('customer')

	async def test_receives_delivery_updates(self):
		communicator = WebsocketCommunicator(CustomerConsumer.as_asgi(), '/ws/customer/')
		communicator.scope['user'] = self.customer
		connected, _ = await communicator.connect()
		self.assertTrue(connected)
		await communicator.receive_json_from()

		await get_channel_layer().group_send(f'user_{self.customer.id}', {
			'type': 'delivery_status_changed',
			'order_id': 'order-1',
			'order_number': 'ORD-1',
			'delivery_status': 'picked_up',
			'message': 'Your order is now picked up.',
		})
		message = await communicator.receive_json_from()

		self.assertEqual(message['delivery_status'], 'picked_up')
		self.assertEqual(message['order_number'], 'ORD-1')
		await communicator.disconnect()

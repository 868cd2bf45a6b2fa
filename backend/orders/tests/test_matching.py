from datetime import timedelta

from django.test import TestCase, SimpleTestCase
from django.utils import timezone

from common.config import MatchingConfig
from orders.models import Order, DriverOrderRejection
from orders.seed import create_driver_test_data
from services.matching import (
	MatchingService,
	Candidate,
	find_eligible_orders,
	rank_candidates,
	INACTIVE_MESSAGE,
)
from services.order_management import (
	DriverNotFoundError,
	LocationUnavailableError,
)

from .helpers import make_driver, make_order, make_user


def numbers(candidates):
	return [c.order.order_number for c in candidates]


class EligibilityTests(TestCase):
	def setUp(self):
		self.driver = make_driver('driver_one')
		self.other_driver = make_driver('driver_two')
		self.customer = make_user('customer')

		# ~1.4km from the driver
		self.nearby = make_order('ORD-NEAR', 37.7849, -122.4094, customer=self.customer)

	def test_nearby_pending_order_is_eligible(self):
		candidates = find_eligible_orders(self.driver, 10)

		self.assertEqual(numbers(candidates), ['ORD-NEAR'])
		self.assertAlmostEqual(candidates[0].distance, 1.42, delta=0.05)

	def test_assigned_order_is_excluded(self):
		self.nearby.assigned_driver = self.other_driver
		self.nearby.save(update_fields=['assigned_driver'])

		self.assertEqual(find_eligible_orders(self.driver, 10), [])

	def test_non_pending_delivery_status_is_excluded(self):
		for delivery_status in ['assigned', 'picked_up', 'out_for_delivery', 'delivered', 'failed']:
			Order.objects.filter(pk=self.nearby.pk).update(delivery_status=delivery_status)
			self.assertEqual(find_eligible_orders(self.driver, 10), [], delivery_status)

	def test_closed_orders_are_excluded(self):
		for status in Order.CLOSED_STATUSES:
			Order.objects.filter(pk=self.nearby.pk).update(status=status)
			self.assertEqual(find_eligible_orders(self.driver, 10), [], status)

	def test_open_order_statuses_are_eligible(self):
		for status in ['pending', 'confirmed', 'processing']:
			Order.objects.filter(pk=self.nearby.pk).update(status=status)
			self.assertEqual(numbers(find_eligible_orders(self.driver, 10)), ['ORD-NEAR'], status)

	def test_order_without_coordinates_is_excluded(self):
		make_order('ORD-NOWHERE', None, None)
		make_order('ORD-HALF', 37.7849, None)

		self.assertEqual(numbers(find_eligible_orders(self.driver, 10)), ['ORD-NEAR'])

	def test_order_outside_radius_is_excluded(self):
		# San Jose, ~62km away
		make_order('ORD-FAR', 37.3541, -121.9552)

		self.assertEqual(numbers(find_eligible_orders(self.driver, 50)), ['ORD-NEAR'])
		self.assertEqual(numbers(find_eligible_orders(self.driver, 1)), [])

	def test_rejection_only_hides_order_from_that_driver(self):
		DriverOrderRejection.objects.record(self.driver.id, self.nearby.id)

		self.assertEqual(find_eligible_orders(self.driver, 10), [])
		self.assertEqual(numbers(find_eligible_orders(self.other_driver, 10)), ['ORD-NEAR'])

	def test_growing_radius_never_loses_orders(self):
		make_order('ORD-MID', 37.7949, -122.3794)
		make_order('ORD-OAK', 37.8144, -122.2612)

		previous = set()
		for radius in [1, 2, 5, 10, 15, 25, 50]:
			current = set(numbers(find_eligible_orders(self.driver, radius)))
			self.assertTrue(previous <= current, radius)
			previous = current

		self.assertEqual(previous, {'ORD-NEAR', 'ORD-MID', 'ORD-OAK'})

	def test_order_across_the_pole_is_eligible(self):
		polar_driver = make_driver('driver_polar', lat=89.7, lon=0)
		make_order('ORD-POLE', 89.9, 180)

		candidates = find_eligible_orders(polar_driver, 50)

		self.assertEqual(numbers(candidates), ['ORD-POLE'])
		self.assertAlmostEqual(candidates[0].distance, 44.48, delta=0.05)

	def test_high_latitude_order_at_wide_longitude_is_eligible(self):
		polar_driver = make_driver('driver_arctic', lat=89.5, lon=0)
		make_order('ORD-ARCTIC', 89.78, 60)

		self.assertEqual(numbers(find_eligible_orders(polar_driver, 50)), ['ORD-ARCTIC'])

	def test_driver_without_location_raises(self):
		driver = make_driver('driver_lost', lat=None, lon=None)

		with self.assertRaises(LocationUnavailableError):
			find_eligible_orders(driver, 10)


class RankingTests(SimpleTestCase):
	def setUp(self):
		self.now = timezone.now()

	def candidate(self, number, distance, minutes_ago=0):
		order = Order(order_number=number, created_at=self.now - timedelta(minutes=minutes_ago))
		return Candidate(order=order, distance=distance)

	def test_nearest_first(self):
		ranked = rank_candidates([
			self.candidate('C', 7.5),
			self.candidate('A', 0.4),
			self.candidate('B', 3.2),
		])

		self.assertEqual(numbers(ranked), ['A', 'B', 'C'])

	def test_equal_distance_prefers_newest(self):
		ranked = rank_candidates([
			self.candidate('OLD', 2.0, minutes_ago=30),
			self.candidate('NEW', 2.0, minutes_ago=1),
			self.candidate('MID', 2.0, minutes_ago=10),
		])

		self.assertEqual(numbers(ranked), ['NEW', 'MID', 'OLD'])

	def test_caps_at_twenty_keeping_the_nearest(self):
		candidates = [self.candidate(f'ORD-{i:02d}', float(i)) for i in range(25, 0, -1)]

		ranked = rank_candidates(candidates)

		self.assertEqual(len(ranked), 20)
		self.assertEqual(ranked[0].order.order_number, 'ORD-01')
		self.assertEqual(ranked[-1].order.order_number, 'ORD-20')

	def test_custom_limit(self):
		candidates = [self.candidate(f'ORD-{i}', float(i)) for i in range(5)]

		self.assertEqual(len(rank_candidates(candidates, limit=3)), 3)

	def test_empty_input(self):
		self.assertEqual(rank_candidates([]), [])


class MatchingServiceTests(TestCase):
	def setUp(self):
		self.service = MatchingService(routing_client=None)

	def test_user_without_driver_profile_raises(self):
		customer = make_user('just_a_customer')

		with self.assertRaises(DriverNotFoundError):
			self.service.get_nearby_orders(customer)

	def test_offline_driver_gets_empty_list_with_message(self):
		driver = make_driver('sleepy', status='offline')
		make_order('ORD-1', 37.7849, -122.4094)

		result = self.service.get_nearby_orders(driver.user)

		self.assertEqual(result.orders, [])
		self.assertEqual(result.message, INACTIVE_MESSAGE)

	def test_deactivated_driver_gets_empty_list_with_message(self):
		driver = make_driver('suspended', is_active=False)
		make_order('ORD-1', 37.7849, -122.4094)

		result = self.service.get_nearby_orders(driver.user)

		self.assertEqual(result.orders, [])
		self.assertEqual(result.message, INACTIVE_MESSAGE)

	def test_busy_driver_can_still_browse(self):
		driver = make_driver('busy_bee', status='busy')
		make_order('ORD-1', 37.7849, -122.4094)

		result = self.service.get_nearby_orders(driver.user)

		self.assertEqual(numbers(result.orders), ['ORD-1'])

	def test_missing_location_raises(self):
		driver = make_driver('nowhere', lat=None, lon=None)

		with self.assertRaises(LocationUnavailableError):
			self.service.get_nearby_orders(driver.user)

	def test_radius_defaults_to_driver_delivery_radius(self):
		driver = make_driver('picky', max_delivery_radius=3)

		self.assertEqual(self.service.resolve_radius(driver, None), 3)
		self.assertEqual(self.service.resolve_radius(driver, 12), 12)

	def test_radius_is_clamped(self):
		driver = make_driver('wide')

		self.assertEqual(self.service.resolve_radius(driver, 500), 50)
		self.assertEqual(self.service.resolve_radius(driver, 0.1), 1)
		self.assertEqual(self.service.resolve_radius(driver, -4), 1)

	def test_config_limit_is_applied(self):
		driver = make_driver('capped')
		for i in range(4):
			make_order(f'ORD-{i}', 37.7849, -122.4094, with_item=False)

		service = MatchingService(config=MatchingConfig(result_limit=2))

		self.assertEqual(len(service.get_nearby_orders(driver.user).orders), 2)

	def test_candidates_carry_items_and_no_travel_time_without_routing(self):
		driver = make_driver('plain')
		make_order('ORD-1', 37.7849, -122.4094)

		result = self.service.get_nearby_orders(driver.user)

		candidate = result.orders[0]
		self.assertEqual([item.product_name for item in candidate.items], ['Groceries'])
		self.assertIsNone(candidate.travel_time)
		self.assertEqual(result.driver_location, (37.7749, -122.4194))


class BayAreaScenarioTests(TestCase):
	def setUp(self):
		self.data = create_driver_test_data()
		self.service = MatchingService(routing_client=None)
		self.sf_driver = self.data.drivers['test_driver_1']
		self.oakland_driver = self.data.drivers['test_driver_2']

	def test_sf_driver_default_radius(self):
		result = self.service.get_nearby_orders(self.sf_driver.user)

		self.assertEqual(result.search_radius, 25)
		self.assertEqual(numbers(result.orders), ['TEST-001', 'TEST-003', 'TEST-002', 'TEST-004'])
		self.assertAlmostEqual(result.orders[0].distance, 1.42, delta=0.05)

	def test_sf_driver_smaller_radius(self):
		result = self.service.get_nearby_orders(self.sf_driver.user, 10)

		self.assertEqual(numbers(result.orders), ['TEST-001', 'TEST-003'])

	def test_oakland_driver_default_radius(self):
		result = self.service.get_nearby_orders(self.oakland_driver.user)

		self.assertEqual(result.search_radius, 20)
		self.assertEqual(numbers(result.orders), ['TEST-002', 'TEST-004', 'TEST-003', 'TEST-001'])

	def test_san_jose_order_is_out_of_reach(self):
		for driver in [self.sf_driver, self.oakland_driver]:
			result = self.service.get_nearby_orders(driver.user, 50)
			self.assertNotIn('TEST-005', numbers(result.orders))

	def test_accepting_driver_no_longer_sees_the_order(self):
		order = self.data.orders['TEST-001']

		self.service.handle_order_action(self.sf_driver.user, order.id, 'accept')

		self.assertNotIn('TEST-001', numbers(self.service.get_nearby_orders(self.sf_driver.user).orders))

	def test_reject_then_accept_across_both_drivers(self):
		self.service.handle_order_action(self.sf_driver.user, self.data.orders['TEST-001'].id, 'reject')

		self.assertNotIn('TEST-001', numbers(self.service.get_nearby_orders(self.sf_driver.user).orders))
		self.assertIn('TEST-001', numbers(self.service.get_nearby_orders(self.oakland_driver.user).orders))

		contested = self.data.orders['TEST-003']
		self.service.handle_order_action(self.oakland_driver.user, contested.id, 'accept')

		for driver in [self.sf_driver, self.oakland_driver]:
			self.assertNotIn('TEST-003', numbers(self.service.get_nearby_orders(driver.user).orders))
		contested.refresh_from_db()
		self.assertEqual(contested.delivery_status, 'assigned')
		self.assertEqual(contested.assigned_driver, self.oakland_driver)

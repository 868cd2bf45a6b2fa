from django.test import SimpleTestCase

from common.config import MatchingConfig
from common.utils import bounding_box, distance_km, is_valid_coordinate


class DistanceTests(SimpleTestCase):
	def test_same_point_is_zero(self):
		self.assertEqual(distance_km(37.7749, -122.4194, 37.7749, -122.4194), 0.0)

	def test_symmetric(self):
		there = distance_km(37.7749, -122.4194, 37.8044, -122.2712)
		back = distance_km(37.8044, -122.2712, 37.7749, -122.4194)

		self.assertAlmostEqual(there, back, places=9)

	def test_known_distances(self):
		# SF downtown -> SoMa and SF -> San Jose
		self.assertAlmostEqual(distance_km(37.7749, -122.4194, 37.7849, -122.4094), 1.42, delta=0.01)
		self.assertAlmostEqual(distance_km(37.7749, -122.4194, 37.3541, -121.9552), 62.0, delta=1.0)

	def test_accepts_decimal_strings(self):
		self.assertAlmostEqual(
			distance_km('37.7749', '-122.4194', '37.7849', '-122.4094'),
			distance_km(37.7749, -122.4194, 37.7849, -122.4094)
		)

	def test_antipodes(self):
		self.assertAlmostEqual(distance_km(0, 0, 0, 180), 3.14159265 * 6371, delta=0.01)


class BoundingBoxTests(SimpleTestCase):
	def assertInside(self, box, lat, lon):
		min_lat, max_lat, min_lon, max_lon = box
		self.assertTrue(min_lat <= lat <= max_lat, (lat, box))
		self.assertTrue(min_lon <= lon <= max_lon, (lon, box))

	def test_contains_points_on_the_circle(self):
		lat, lon, radius = 37.7749, -122.4194, 10
		box = bounding_box(lat, lon, radius)

		# Probe due north/south/east/west just inside the radius
		for d_lat, d_lon in [(1, 0), (-1, 0), (0, 1), (0, -1)]:
			probe_lat = lat + d_lat * 0.0899
			probe_lon = lon + d_lon * 0.1137
			self.assertLessEqual(distance_km(lat, lon, probe_lat, probe_lon), radius)
			self.assertInside(box, probe_lat, probe_lon)

	def test_near_antimeridian_spans_all_longitudes(self):
		box = bounding_box(0, 179.99, 10)

		self.assertEqual(box[2:], (-180.0, 180.0))

	def test_near_pole_spans_all_longitudes(self):
		box = bounding_box(89.99, 0, 10)

		self.assertEqual(box[2:], (-180.0, 180.0))
		self.assertEqual(box[1], 90.0)

	def test_circle_over_the_pole_spans_all_longitudes(self):
		# 0.3 degrees from the pole with a 50km radius reaches past it
		box = bounding_box(89.7, 0, 50)

		self.assertEqual(box[2:], (-180.0, 180.0))
		self.assertInside(box, 89.9, 180)

	def test_high_latitude_box_reaches_tangent_points(self):
		lat, lon, radius = 89.5, 0.0, 50
		box = bounding_box(lat, lon, radius)

		# ~48km away, far wider in longitude than radius / (111 * cos(lat))
		probe_lat, probe_lon = 89.78, 60.0
		self.assertLessEqual(distance_km(lat, lon, probe_lat, probe_lon), radius)
		self.assertInside(box, probe_lat, probe_lon)
		self.assertLess(box[3], 180.0)


class CoordinateTests(SimpleTestCase):
	def test_ranges(self):
		self.assertTrue(is_valid_coordinate(90, -180))
		self.assertFalse(is_valid_coordinate(90.1, 0))
		self.assertFalse(is_valid_coordinate(0, 180.5))


class MatchingConfigTests(SimpleTestCase):
	def test_clamp_radius(self):
		config = MatchingConfig()

		self.assertEqual(config.clamp_radius(0), 1)
		self.assertEqual(config.clamp_radius(7.5), 7.5)
		self.assertEqual(config.clamp_radius(120), 50)

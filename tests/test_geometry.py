"""
Tests for the raw geometry helpers and pulse curves.
"""

import math
import unittest

from guildmap.shared import pulse
from guildmap.shared.geometry import (
    point_in_box,
    point_in_polygon,
    polygon_centroid,
    scale_polygon,
)

UNIT_SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


class TestPointInPolygon(unittest.TestCase):

    def test_inside_points(self):
        for px, py in [(0.5, 0.5), (0.01, 0.01), (0.99, 0.5), (0.2, 0.9)]:
            self.assertTrue(point_in_polygon(px, py, UNIT_SQUARE), (px, py))

    def test_outside_points(self):
        for px, py in [(1.5, 0.5), (-0.1, 0.5), (0.5, -0.2), (0.5, 1.01), (3.0, 3.0)]:
            self.assertFalse(point_in_polygon(px, py, UNIT_SQUARE), (px, py))

    def test_edge_points_are_deterministic(self):
        for px, py in [(0.0, 0.5), (1.0, 0.5), (0.5, 0.0), (0.5, 1.0)]:
            first = point_in_polygon(px, py, UNIT_SQUARE)
            for _ in range(5):
                self.assertEqual(point_in_polygon(px, py, UNIT_SQUARE), first)

    def test_degenerate_polygons_never_hit(self):
        self.assertFalse(point_in_polygon(0.0, 0.0, []))
        self.assertFalse(point_in_polygon(0.0, 0.0, [(0.0, 0.0)]))
        self.assertFalse(point_in_polygon(0.5, 0.0, [(0.0, 0.0), (1.0, 0.0)]))

    def test_concave_polygon(self):
        # U shape: the notch between the arms is outside.
        u_shape = [(0, 0), (30, 0), (30, 30), (20, 30), (20, 10), (10, 10), (10, 30), (0, 30)]
        self.assertTrue(point_in_polygon(5, 20, u_shape))
        self.assertTrue(point_in_polygon(25, 20, u_shape))
        self.assertFalse(point_in_polygon(15, 20, u_shape))
        self.assertTrue(point_in_polygon(15, 5, u_shape))


class TestPolygonHelpers(unittest.TestCase):

    def test_scale_polygon(self):
        self.assertEqual(
            scale_polygon([(10, 20), (30, 40)], 0.5, 2.0),
            ((5.0, 40.0), (15.0, 80.0)),
        )

    def test_centroid_is_vertex_average(self):
        self.assertEqual(polygon_centroid([(0, 0), (4, 0), (4, 2), (0, 2)]), (2.0, 1.0))
        self.assertEqual(polygon_centroid([]), (0.0, 0.0))

    def test_point_in_box(self):
        self.assertTrue(point_in_box(100, 100, 100, 100, 52))
        self.assertTrue(point_in_box(126, 74, 100, 100, 52))
        self.assertFalse(point_in_box(127, 100, 100, 100, 52))


class TestPulse(unittest.TestCase):

    def test_region_pulse_range(self):
        for ms in range(0, 5000, 37):
            beat = pulse.region_pulse(ms)
            self.assertGreaterEqual(beat, 0.3 - 1e-9)
            self.assertLessEqual(beat, 2.7 + 1e-9)
        self.assertAlmostEqual(pulse.region_pulse(0.0), 1.5)

    def test_marker_radius_and_ring(self):
        self.assertAlmostEqual(pulse.marker_pulse(0.0), 6.0)
        self.assertAlmostEqual(pulse.marker_radius(52, 6.0), 32.0)
        self.assertAlmostEqual(pulse.marker_ring_radius(52), 32.0)
        peak = pulse.marker_pulse(math.pi / 2 / 2.8)
        self.assertAlmostEqual(peak, 10.0)

    def test_tooltip_glow(self):
        alpha, size = pulse.tooltip_glow(0.0)
        self.assertAlmostEqual(alpha, 0.28)
        self.assertAlmostEqual(size, 14.0)


if __name__ == "__main__":
    unittest.main()

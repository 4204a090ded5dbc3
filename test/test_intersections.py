import unittest
import numpy as np
from numpy.testing import assert_almost_equal

from tpcgeo.intersections import (intersect_lines, point_within_segments,
                                  wires_intersection_and_offsets,
                                  compute_third_plane_slope, compute_third_plane_dtdw,
                                  MIN_RESOLVED_SLOPE, HUGE_SLOPE)
from tpcgeo.wire import WireGeo

def track_slope(direction, phi):
    '''Drift distance per unit of wire coordinate of a track along
    `direction`, in a plane with wire coordinate axis at `phi` from z.'''
    dx, dy, dz = direction
    return dx / (dy * np.sin(phi) + dz * np.cos(phi))

class TestLines(unittest.TestCase):
    def test_crossing(self):
        assert_almost_equal(intersect_lines((0.0, 0.0), (1.0, 1.0), (0.0, 1.0), (1.0, 0.0)),
                            (0.5, 0.5))
        # outside of both segments: the lines still meet
        assert_almost_equal(intersect_lines((0.0, 0.0), (1.0, 0.0), (3.0, 1.0), (3.0, 2.0)),
                            (3.0, 0.0))

    def test_parallel(self):
        self.assertTrue(intersect_lines((0.0, 0.0), (1.0, 1.0), (0.0, 1.0), (1.0, 2.0)) is None)

    def test_within_segments(self):
        a0, a1 = (0.0, 0.0), (1.0, 1.0)
        b0, b1 = (0.0, 1.0), (1.0, 0.0)
        self.assertTrue(point_within_segments(a0, a1, b0, b1, (0.5, 0.5)))
        self.assertTrue(point_within_segments(a0, a1, b0, b1, (1.0, 1.0)))
        self.assertFalse(point_within_segments(a0, a1, b0, b1, (1.1, 0.5)))

class TestWireOffsets(unittest.TestCase):
    def test_skew_wires(self):
        wire1 = WireGeo((0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        wire2 = WireGeo((1.0, 0.5, -1.0), (1.0, 0.5, 3.0))
        result = wires_intersection_and_offsets(wire1, wire2)
        assert_almost_equal(result.point, (0.0, 0.5, 0.0))
        assert_almost_equal(result.offset1, 0.5)
        assert_almost_equal(result.offset2, -1.0)

    def test_offsets_locate_closest_points(self):
        wire1 = WireGeo((0.0, -3.0, -2.0), (0.0, 5.0, 4.0))
        wire2 = WireGeo((0.5, 4.0, -1.0), (0.5, -2.0, 6.0))
        result = wires_intersection_and_offsets(wire1, wire2)
        p1 = wire1.get_position_from_center(result.offset1)
        p2 = wire2.get_position_from_center(result.offset2)
        assert_almost_equal(p1, result.point)
        # the segment joining the closest points is orthogonal to both wires
        assert_almost_equal(np.dot(p2 - p1, wire1.direction()), 0.0)
        assert_almost_equal(np.dot(p2 - p1, wire2.direction()), 0.0)

    def test_parallel_wires(self):
        wire1 = WireGeo((0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        wire2 = WireGeo((0.0, -1.0, 2.0), (0.0, 1.0, 2.0))
        result = wires_intersection_and_offsets(wire1, wire2)
        self.assertTrue(np.all(np.isinf(result.point)))
        self.assertEqual(result.offset1, np.inf)
        self.assertEqual(result.offset2, np.inf)

class TestThirdPlaneSlope(unittest.TestCase):
    def setUp(self):
        self.angles = (-np.pi / 3, np.pi / 3, 0.0)

    def test_track(self):
        direction = (1.0, 2.0, 3.0)
        s1, s2, s3 = [track_slope(direction, phi) for phi in self.angles]
        a1, a2, a3 = self.angles
        assert_almost_equal(compute_third_plane_slope(a1, s1, a2, s2, a3), s3)
        # any pair of planes predicts the other one
        assert_almost_equal(compute_third_plane_slope(a3, s3, a1, s1, a2), s2)

    def test_symmetric_planes(self):
        angles = (0.0, np.pi / 3, 2 * np.pi / 3)
        for direction in ((1.0, 0.0, 1.0), (0.3, -1.0, 0.2), (2.0, 1.0, -1.0)):
            s1, s2, s3 = [track_slope(direction, phi) for phi in angles]
            assert_almost_equal(compute_third_plane_slope(angles[0], s1, angles[1], s2, angles[2]),
                                s3)

    def test_dtdw(self):
        direction = (-0.5, 1.0, 4.0)
        pitches = (0.5, 0.4, 0.3)
        dtdw = [track_slope(direction, phi) * pitch for phi, pitch in zip(self.angles, pitches)]
        a1, a2, a3 = self.angles
        assert_almost_equal(compute_third_plane_dtdw(a1, pitches[0], dtdw[0],
                                                     a2, pitches[1], dtdw[1],
                                                     a3, pitches[2]),
                            dtdw[2])

    def test_unresolved_slopes(self):
        a1, a2, a3 = self.angles
        self.assertEqual(compute_third_plane_slope(a1, 0.0, a2, 0.0005, a3), MIN_RESOLVED_SLOPE)
        assert_almost_equal(compute_third_plane_slope(a1, 0.0, a2, 2.0, a3),
                            1.0 / MIN_RESOLVED_SLOPE)

    def test_along_drift(self):
        a = np.pi / 3
        self.assertEqual(compute_third_plane_slope(a, 1.0, -a, -1.0, 0.0), HUGE_SLOPE)

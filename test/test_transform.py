import unittest
import numpy as np
from numpy.testing import assert_almost_equal, assert_equal

from tpcgeo.transform import (Transformation, rounded01, dominant_axis, normalize,
                              make_rotation_matrix)
from tpcgeo.decomposer import Decomposer, DecomposedVector
from tpcgeo.box import (BoxBoundedGeo, Range, Rectangle, box_from_local_extents,
                        coordinate_contained)

# rotation by 90 degrees around z: x goes to y
ROT_Z90 = np.array([[0.0, -1.0, 0.0],
                    [1.0,  0.0, 0.0],
                    [0.0,  0.0, 1.0]])

class TestTransformation(unittest.TestCase):
    def setUp(self):
        self.trans = Transformation(ROT_Z90, (1.0, 2.0, 3.0))

    def test_to_world(self):
        assert_almost_equal(self.trans.to_world_point((1.0, 0.0, 0.0)), (1.0, 3.0, 3.0))
        assert_almost_equal(self.trans.to_world_vector((1.0, 0.0, 0.0)), (0.0, 1.0, 0.0))

    def test_round_trip(self):
        points = np.random.uniform(-10.0, 10.0, size=(20, 3))
        world = self.trans.to_world_point(points)
        assert_almost_equal(self.trans.to_local_point(world), points)
        assert_almost_equal(self.trans.to_local_vector(self.trans.to_world_vector(points)), points)

    def test_composition(self):
        other = Transformation(translation=(0.0, 0.0, -5.0))
        p = np.array([0.5, -1.0, 2.0])
        assert_almost_equal((self.trans * other).to_world_point(p),
                            self.trans.to_world_point(other.to_world_point(p)))

    def test_bad_shapes(self):
        with self.assertRaises(ValueError):
            Transformation(np.identity(2))
        with self.assertRaises(ValueError):
            Transformation(translation=(1.0, 2.0))

    def test_rounded01(self):
        v = rounded01((1e-9, 0.99999999, -1.00000001), 1e-6)
        assert_equal(v, (0.0, 1.0, -1.0))
        assert_equal(rounded01((0.5, -0.5, 0.1), 1e-6), (0.5, -0.5, 0.1))

    def test_dominant_axis(self):
        self.assertEqual(dominant_axis((0.1, -0.9, 0.3)), 1)
        self.assertEqual(dominant_axis(normalize((0.0, 0.0, -2.0))), 2)

class TestRotation(unittest.TestCase):
    def test_rotation_is_orthogonal(self):
        m = make_rotation_matrix(1.2, (1.0, 2.0, -0.5))
        assert_almost_equal(np.dot(m, m.T), np.identity(3))
        assert_almost_equal(np.linalg.det(m), 1.0)

    def test_axis_is_fixed(self):
        axis = np.array([0.0, 1.0, 1.0])
        assert_almost_equal(np.dot(make_rotation_matrix(2.0, axis), axis), axis)

class TestDecomposer(unittest.TestCase):
    def setUp(self):
        self.decomp = Decomposer((1.0, 2.0, 3.0), (0.0, 0.0, 1.0), (0.0, 1.0, 0.0))

    def test_normal(self):
        assert_almost_equal(self.decomp.normal_dir, (-1.0, 0.0, 0.0))

    def test_decompose_point(self):
        distance, projection = self.decomp.decompose_point((4.0, 2.5, 1.0))
        assert_almost_equal(distance, -3.0)
        assert_almost_equal(projection, (-2.0, 0.5))

    def test_point_round_trip(self):
        points = np.random.uniform(-50.0, 50.0, size=(10, 3))
        decomposed = self.decomp.decompose_point(points)
        assert_almost_equal(self.decomp.compose_point(decomposed), points)
        for p in points:
            assert_almost_equal(self.decomp.compose_point(*self.decomp.decompose_point(p)), p)

    def test_vector_round_trip(self):
        v = np.array([0.3, -2.0, 7.0])
        decomposed = self.decomp.decompose_vector(v)
        self.assertTrue(isinstance(decomposed, DecomposedVector))
        assert_almost_equal(self.decomp.compose_vector(decomposed), v)

    def test_reference_does_not_affect_vectors(self):
        v = np.array([1.0, 1.0, 1.0])
        before = self.decomp.project_vector_on_plane(v)
        self.decomp.set_reference_point((100.0, 100.0, 100.0))
        assert_almost_equal(self.decomp.project_vector_on_plane(v), before)

    def test_set_base(self):
        self.decomp.set_base((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert_almost_equal(self.decomp.normal_dir, (0.0, 0.0, 1.0))
        assert_almost_equal(self.decomp.point_normal_component((0.0, 0.0, 5.0)), 2.0)

    def test_set_single_axis(self):
        self.decomp.set_main_dir((0.0, 1.0, 0.0))
        self.decomp.set_secondary_dir((0.0, 0.0, 1.0))
        assert_almost_equal(self.decomp.normal_dir, (1.0, 0.0, 0.0))
        assert_almost_equal(self.decomp.project_point_on_plane((0.0, 3.0, 4.0)), (1.0, 1.0))

class TestBox(unittest.TestCase):
    def test_contains(self):
        box = BoxBoundedGeo((1.0, 1.0, 1.0), (-1.0, -1.0, -1.0))
        assert_equal(box.lower, (-1.0, -1.0, -1.0))
        self.assertTrue(box.contains_position((0.5, -0.5, 1.0)))
        self.assertFalse(box.contains_position((0.5, -0.5, 1.05)))
        self.assertTrue(box.contains_position((0.5, -0.5, 1.05), wiggle=1.1))
        self.assertEqual((box.min_x(), box.max_y(), box.min_z()), (-1.0, 1.0, -1.0))

    def test_coordinate_contained(self):
        self.assertTrue(coordinate_contained(-1.05, -1.0, 2.0, 1.1))
        self.assertFalse(coordinate_contained(1.95, 1.0, 2.0, 0.9))

    def test_box_from_local_extents(self):
        trans = Transformation(ROT_Z90, (10.0, 0.0, 0.0))
        box = box_from_local_extents(trans, (1.0, 2.0, 3.0))
        assert_almost_equal(box.lower, (8.0, -1.0, -3.0))
        assert_almost_equal(box.upper, (12.0, 1.0, 3.0))
        assert_almost_equal(box.get_center(), (10.0, 0.0, 0.0))

    def test_extend(self):
        box = BoxBoundedGeo((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
        box.extend_to_include((2.0, -1.0, 0.5))
        assert_equal(box.bounds()[0], (0.0, -1.0, 0.0))
        assert_equal(box.bounds()[1], (2.0, 1.0, 1.0))
        self.assertEqual(box.size_x(), 2.0)

class TestRange(unittest.TestCase):
    def test_shrink(self):
        r = Range(-2.0, 2.0)
        r.shrink(0.5)
        self.assertEqual(r, Range(-1.5, 1.5))

    def test_shrink_collapses(self):
        r = Range(0.0, 1.0)
        r.shrink(2.0)
        self.assertTrue(r.is_null())
        self.assertEqual(r.lower, 0.5)

    def test_delta(self):
        r = Range(-1.0, 1.0)
        self.assertEqual(r.delta(0.0), 0.0)
        self.assertEqual(r.delta(3.0), -2.0)
        self.assertEqual(r.delta(-3.0, margin=0.5), 2.5)

    def test_rectangle(self):
        rect = Rectangle(Range(-1.0, 1.0), Range(-2.0, 2.0))
        self.assertTrue(rect.contains(0.5, 1.5))
        self.assertFalse(rect.contains(0.5, 1.5, 0.6))
        assert_equal(rect.delta(2.0, -3.0), (-1.0, 1.0))

    def test_extend(self):
        r = Range(0.0, 1.0)
        r.extend(-2.0)
        r.extend(0.5)
        self.assertEqual(r, Range(-2.0, 1.0))
        self.assertEqual(r.width(), 3.0)
        self.assertEqual(r.center(), -0.5)

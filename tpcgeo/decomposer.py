'''tpcgeo.decomposer: projection of 3D points on an oriented plane.

A plane is described by a reference point R and two orthonormal directions
lying on it, the "main" direction A and the "secondary" direction B.  The
normal N is A x B, so that (A, B, N) is a positive base.  A point P is
decomposed into the distance ``(P - R) . N`` from the plane and the
projection ``((P - R) . A, (P - R) . B)`` on it; composition is the inverse,
``P = R + d N + a A + b B``.  Vectors are decomposed the same way, without
the reference point.

All the functions accept either a single 3-vector or an array of shape
(N, 3).  The base is assumed orthonormal: this is not checked.
'''

from collections import namedtuple

import numpy as np

DecomposedVector = namedtuple('DecomposedVector', 'distance projection')

def _stack_scalar(value):
    return np.asarray(value, dtype=float)[..., np.newaxis]

class Decomposer(object):
    "Decomposition of points and vectors on a plane with a reference point."
    def __init__(self, reference_point=(0.0, 0.0, 0.0),
                 main_dir=(1.0, 0.0, 0.0), secondary_dir=(0.0, 1.0, 0.0)):
        self.reference_point = np.array(reference_point, dtype=float)
        self._main_dir = np.array(main_dir, dtype=float)
        self._secondary_dir = np.array(secondary_dir, dtype=float)
        self._normal_dir = np.cross(self._main_dir, self._secondary_dir)

    @property
    def main_dir(self):
        return self._main_dir

    @property
    def secondary_dir(self):
        return self._secondary_dir

    @property
    def normal_dir(self):
        return self._normal_dir

    def set_reference_point(self, point):
        self.reference_point = np.array(point, dtype=float)

    def set_main_dir(self, main_dir):
        self._main_dir = np.array(main_dir, dtype=float)
        self._normal_dir = np.cross(self._main_dir, self._secondary_dir)

    def set_secondary_dir(self, secondary_dir):
        self._secondary_dir = np.array(secondary_dir, dtype=float)
        self._normal_dir = np.cross(self._main_dir, self._secondary_dir)

    def set_base(self, main_dir, secondary_dir):
        self._main_dir = np.array(main_dir, dtype=float)
        self._secondary_dir = np.array(secondary_dir, dtype=float)
        self._normal_dir = np.cross(self._main_dir, self._secondary_dir)

    def _relative(self, point):
        return np.asarray(point, dtype=float) - self.reference_point

    # vector components

    def vector_main_component(self, v):
        return np.dot(np.asarray(v, dtype=float), self._main_dir)

    def vector_secondary_component(self, v):
        return np.dot(np.asarray(v, dtype=float), self._secondary_dir)

    def vector_normal_component(self, v):
        return np.dot(np.asarray(v, dtype=float), self._normal_dir)

    def project_vector_on_plane(self, v):
        "Returns the (main, secondary) components of the vector `v`."
        return np.stack((self.vector_main_component(v),
                         self.vector_secondary_component(v)), axis=-1)

    def decompose_vector(self, v):
        return DecomposedVector(self.vector_normal_component(v),
                                self.project_vector_on_plane(v))

    # point components

    def point_main_component(self, point):
        return self.vector_main_component(self._relative(point))

    def point_secondary_component(self, point):
        return self.vector_secondary_component(self._relative(point))

    def point_normal_component(self, point):
        return self.vector_normal_component(self._relative(point))

    def project_point_on_plane(self, point):
        "Returns the (main, secondary) coordinates of `point` on the plane."
        return self.project_vector_on_plane(self._relative(point))

    def decompose_point(self, point):
        return self.decompose_vector(self._relative(point))

    # composition

    def compose_vector(self, distance, projection=None):
        '''Returns the 3D vector with the given `distance` component along
        the normal and the given (main, secondary) `projection`.

        A single ``DecomposedVector`` may be passed instead.'''
        if projection is None:
            distance, projection = distance
        projection = np.asarray(projection, dtype=float)
        return _stack_scalar(distance) * self._normal_dir \
            + projection[..., 0:1] * self._main_dir \
            + projection[..., 1:2] * self._secondary_dir

    def compose_point(self, distance, projection=None):
        "Same as compose_vector(), but shifted by the reference point."
        return self.reference_point + self.compose_vector(distance, projection)

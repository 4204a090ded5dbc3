import numpy as np

from tpcgeo.transform import norm, normalize

def normalized_end_points(start, end):
    '''Returns `start` and `end` ordered so that the end has the larger z;
    for (nearly) vertical wires, with the same z at both ends within 0.01 cm,
    the end has the larger y instead.'''
    start = np.array(start, dtype=float)
    end = np.array(end, dtype=float)
    if end[2] < start[2]:
        start, end = end, start
    if end[1] < start[1] and abs(end[2] - start[2]) < 0.01:
        start, end = end, start
    return start, end

class WireGeo(object):
    "A single straight wire, described by its two end points [cm]."
    def __init__(self, start, end, radius=0.0):
        start = np.array(start, dtype=float)
        end = np.array(end, dtype=float)
        if start.shape != (3,) or end.shape != (3,):
            raise ValueError('wire end points must be 3-vectors.')
        if norm(end - start) == 0.0:
            raise ValueError('wire has zero length.')
        self._start = start
        self._end = end
        self.radius = radius
        self.flipped = False

    @classmethod
    def from_transformation(cls, transformation, half_length, radius=0.0):
        '''Create a wire lying along the local z axis of `transformation`,
        centered on its local origin.'''
        start = transformation.to_world_point((0.0, 0.0, -half_length))
        end = transformation.to_world_point((0.0, 0.0, half_length))
        return cls(start, end, radius=radius)

    def get_start(self):
        return self._start.copy()

    def get_end(self):
        return self._end.copy()

    def get_center(self):
        return (self._start + self._end) / 2.0

    @property
    def half_length(self):
        return norm(self._end - self._start) / 2.0

    def length(self):
        return 2.0 * self.half_length

    def direction(self):
        "Unit vector from start to end."
        return normalize(self._end - self._start)

    def theta_z(self):
        "Angle of the wire from the z axis, in [0, pi]."
        return np.arccos(np.clip(self.direction()[2], -1.0, 1.0))

    def phi(self):
        "Azimuthal angle of the wire direction, around z."
        d = self.direction()
        return np.arctan2(d[1], d[0])

    def get_position_from_center(self, s):
        "Point on the wire at signed distance `s` from its center."
        return self.get_center() + s * self.direction()

    def end_points(self):
        "Start and end, ordered as in normalized_end_points()."
        return normalized_end_points(self._start, self._end)

    def distance_from(self, other):
        '''Distance of the center of `other` from the line of this wire.
        Meaningful for parallel wires.'''
        delta = other.get_center() - self.get_center()
        d = self.direction()
        return norm(delta - np.dot(delta, d) * d)

    def flip(self):
        "Swaps start and end of the wire."
        self._start, self._end = self._end, self._start
        self.flipped = not self.flipped

    def wire_info(self, indent=''):
        return ('%swire from %s to %s (%.4f cm long, theta_z %.4f rad)'
                % (indent, self._start.tolist(), self._end.tolist(),
                   self.length(), self.theta_z()))

    def __repr__(self):
        return '<WireGeo %s -- %s>' % (self._start.tolist(), self._end.tolist())

'''tpcgeo.box: axis-aligned boxes and 2D rectangles.'''

from itertools import product

import numpy as np

def coordinate_contained(c, lower, upper, wiggle=1.0):
    '''Returns whether `c` is in [`lower`, `upper`], with the range
    expanded (``wiggle > 1``) or shrunk (``wiggle < 1``) by a relative
    amount on each side.'''
    lo = lower / wiggle if lower > 0 else lower * wiggle
    hi = upper * wiggle if upper > 0 else upper / wiggle
    return lo <= c <= hi

class BoxBoundedGeo(object):
    "Axis-aligned box in world coordinates."
    def __init__(self, lower, upper):
        lower = np.asarray(lower, dtype=float)
        upper = np.asarray(upper, dtype=float)
        if lower.shape != (3,) or upper.shape != (3,):
            raise ValueError('box corners must be 3-vectors.')
        self.lower = np.minimum(lower, upper)
        self.upper = np.maximum(lower, upper)

    def min_x(self): return self.lower[0]
    def max_x(self): return self.upper[0]
    def min_y(self): return self.lower[1]
    def max_y(self): return self.upper[1]
    def min_z(self): return self.lower[2]
    def max_z(self): return self.upper[2]

    def size_x(self): return self.upper[0] - self.lower[0]
    def size_y(self): return self.upper[1] - self.lower[1]
    def size_z(self): return self.upper[2] - self.lower[2]

    def half_sizes(self):
        return (self.upper - self.lower) / 2.0

    def get_center(self):
        return (self.upper + self.lower) / 2.0

    def bounds(self):
        "Return the lower and upper corners as a tuple."
        return self.lower.copy(), self.upper.copy()

    def contains_position(self, point, wiggle=1.0):
        point = np.asarray(point, dtype=float)
        return all(coordinate_contained(point[i], self.lower[i], self.upper[i], wiggle)
                   for i in range(3))

    def extend_to_include(self, point):
        point = np.asarray(point, dtype=float)
        self.lower = np.minimum(self.lower, point)
        self.upper = np.maximum(self.upper, point)

    def __repr__(self):
        return '<%s %s -- %s>' % (type(self).__name__, self.lower.tolist(), self.upper.tolist())

def box_from_local_extents(transformation, half_sizes):
    '''Returns the world ``BoxBoundedGeo`` containing the local box of the
    given `half_sizes` placed by `transformation`.'''
    half_sizes = np.asarray(half_sizes, dtype=float)
    corners = np.array([np.array(signs) * half_sizes
                        for signs in product((-1.0, 1.0), repeat=3)])
    world = transformation.to_world_point(corners)
    return BoxBoundedGeo(world.min(axis=0), world.max(axis=0))

class Range(object):
    "A closed interval [lower, upper]."
    def __init__(self, lower, upper):
        self.lower = float(lower)
        self.upper = float(upper)

    def width(self):
        return self.upper - self.lower

    def center(self):
        return (self.upper + self.lower) / 2.0

    def is_null(self):
        return self.lower == self.upper

    def contains(self, value, margin=0.0):
        return (self.lower + margin) <= value <= (self.upper - margin)

    def delta(self, value, margin=0.0):
        '''Returns the displacement that, added to `value`, brings it within
        the range shrunk by `margin` on each side (0 if already there).'''
        if value < self.lower + margin:
            return self.lower + margin - value
        if value > self.upper - margin:
            return self.upper - margin - value
        return 0.0

    def extend(self, value):
        self.lower = min(self.lower, value)
        self.upper = max(self.upper, value)

    def shrink(self, amount):
        '''Moves both borders inward by `amount`; if they would cross, the
        range collapses to its center.'''
        if self.width() < 2.0 * amount:
            self.lower = self.upper = self.center()
        else:
            self.lower += amount
            self.upper -= amount

    def __eq__(self, other):
        return isinstance(other, Range) and (self.lower, self.upper) == (other.lower, other.upper)

    def __repr__(self):
        return 'Range(%g, %g)' % (self.lower, self.upper)

class Rectangle(object):
    "A rectangle in width/depth plane coordinates."
    def __init__(self, width, depth):
        self.width = width
        self.depth = depth

    def contains(self, w, d, w_margin=0.0, d_margin=None):
        if d_margin is None:
            d_margin = w_margin
        return self.width.contains(w, w_margin) and self.depth.contains(d, d_margin)

    def delta(self, w, d, w_margin=0.0, d_margin=None):
        if d_margin is None:
            d_margin = w_margin
        return np.array([self.width.delta(w, w_margin), self.depth.delta(d, d_margin)])

    def __repr__(self):
        return 'Rectangle(width=%r, depth=%r)' % (self.width, self.depth)

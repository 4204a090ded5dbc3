'''tpcgeo.intersections: where wires of different planes meet.

Wires of different planes do not really cross, since the planes are
separated along the drift direction.  Two approximations are offered:

* the 2D one works on the coordinates transverse to the drift, (y, z),
  intersecting the projections of the two wires as infinite lines and then
  checking that the crossing falls within both segments;
* the 3D one takes the point on the first wire which is closest to the line
  of the second one.

The slope of a track in a third plane, given the slopes in two other
planes, is computed here as well.
'''

from collections import namedtuple

import numpy as np

# coordinates within this distance of a segment border are inside it [cm]
SEGMENT_TOLERANCE = 1e-6

# slopes smaller than this (in absolute value) can't be resolved
MIN_RESOLVED_SLOPE = 0.001

# what a slope with null inverse is reported as
HUGE_SLOPE = 999.0

WireIDIntersection = namedtuple('WireIDIntersection', 'y z tpc')

IntersectionPointAndOffsets = namedtuple('IntersectionPointAndOffsets', 'point offset1 offset2')

def intersect_lines(a0, a1, b0, b1):
    '''Returns the intersection point of the 2D line through `a0` and `a1`
    with the one through `b0` and `b1`, or None if the lines are parallel.'''
    a0, a1, b0, b1 = [np.asarray(p, dtype=float) for p in (a0, a1, b0, b1)]
    # solve a0 + s (a1 - a0) = b0 + t (b1 - b0) for (s, t)
    m = np.column_stack([a1 - a0, b0 - b1])
    try:
        s, _ = np.linalg.solve(m, b0 - a0)
    except np.linalg.LinAlgError:
        return None
    return a0 + s * (a1 - a0)

def _within(c, lower, upper, tol):
    if lower > upper:
        lower, upper = upper, lower
    return lower - tol <= c <= upper + tol

def point_within_segments(a0, a1, b0, b1, p, tol=SEGMENT_TOLERANCE):
    '''Returns whether the 2D point `p` is within the bounding rectangles of
    both segment `a0`-`a1` and segment `b0`-`b1`, borders included.'''
    return all(_within(p[i], a0[i], a1[i], tol) and _within(p[i], b0[i], b1[i], tol)
               for i in range(2))

def wires_intersection_and_offsets(wire1, wire2):
    '''Returns the point on `wire1` closest to the line of `wire2`, and the
    signed distances of the two closest points from the center of each wire
    along its direction.  Both wires are treated as infinite lines.

    For parallel wires the point and the offsets are infinite.
    '''
    c1, d1 = wire1.get_center(), wire1.direction()
    c2, d2 = wire2.get_center(), wire2.direction()
    delta = c2 - c1
    cosine = np.dot(d1, d2)
    denom = 1.0 - cosine**2
    if denom <= 0.0:
        return IntersectionPointAndOffsets(np.full(3, np.inf), np.inf, np.inf)
    offset1 = (np.dot(delta, d1) - cosine * np.dot(delta, d2)) / denom
    offset2 = (cosine * np.dot(delta, d1) - np.dot(delta, d2)) / denom
    return IntersectionPointAndOffsets(c1 + offset1 * d1, offset1, offset2)

def compute_third_plane_slope(angle1, slope1, angle2, slope2, angle3):
    '''Returns the slope of a track in the plane with wire coordinate
    direction at `angle3`, given its slopes `slope1` and `slope2` in the
    planes at `angle1` and `angle2`.

    Angles are the ``phi_z()`` of the planes.  Slopes are ratios of drift
    distance to wire coordinate distance, in the same units for all the
    planes.  If both slopes are too small to be resolved, the result is
    ``MIN_RESOLVED_SLOPE``; if only one is, the result is the inverse of
    ``MIN_RESOLVED_SLOPE``.  A track running along the drift direction in
    the third plane gets ``HUGE_SLOPE``.
    '''
    if abs(slope1) < MIN_RESOLVED_SLOPE and abs(slope2) < MIN_RESOLVED_SLOPE:
        return MIN_RESOLVED_SLOPE

    slope3 = MIN_RESOLVED_SLOPE
    if abs(slope1) > MIN_RESOLVED_SLOPE and abs(slope2) > MIN_RESOLVED_SLOPE:
        slope3 = ((np.sin(angle3 - angle2) / slope1 - np.sin(angle3 - angle1) / slope2)
                  / np.sin(angle1 - angle2))
    if slope3 != 0.0:
        return 1.0 / slope3
    return HUGE_SLOPE

def compute_third_plane_dtdw(angle1, pitch1, dtdw1, angle2, pitch2, dtdw2,
                             angle_target, pitch_target):
    '''Like compute_third_plane_slope(), with slopes expressed as drift
    distance per wire; each plane has its own wire pitch.'''
    return pitch_target * compute_third_plane_slope(angle1, dtdw1 / pitch1,
                                                    angle2, dtdw2 / pitch2,
                                                    angle_target)

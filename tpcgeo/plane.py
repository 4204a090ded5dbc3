'''tpcgeo.plane: geometry of a single wire plane.

The plane is represented in the geometry description by a box containing
the wires.  The box has some thickness, and the wires are not necessarily
on its median section: the plane proper is the one the wires lie on.

Two reference frames are defined on the plane.

The "wire" frame has the wire direction as main axis and the direction of
increasing wire number as secondary axis; its normal points toward the
inside of the TPC.  The reference point is the center of the first wire, so
that the secondary coordinate of the center of wire ``n`` is ``n`` times the
wire pitch.  This base is positive: (wire, increasing wire, normal).

The "frame" base has the two sides of the plane box, "width" and "depth",
as axes, and the center of the plane as reference point.  Width is the
side closer to the z axis.  Both axes point along their largest world
component, so the frame normal may be opposite to the one of the wire
frame, depending on which side of the plane the TPC is.

All the derived quantities are computed by ``update_after_sorting()``,
which must be called once the wires are in their final order.
'''

import numpy as np
from uncertainties import ufloat

from tpcgeo.box import Range, Rectangle, box_from_local_extents
from tpcgeo.constants import View, Orientation, view_name, orientation_name
from tpcgeo.decomposer import Decomposer
from tpcgeo.errors import GeometryError, WireOutOfRangeError, InvalidWireError
from tpcgeo.ids import PlaneID, WireID
from tpcgeo.log import logger
from tpcgeo.transform import Transformation, norm, normalize, rounded01, dominant_axis

# components of detected directions closer than this to 0 or 1 are snapped
DIRECTION_TOLERANCE = 1e-4

# relative spread of the spacing between wires above which we complain
PITCH_SPREAD_TOLERANCE = 1e-3

class PlaneGeo(object):
    "Geometry information for a single wire plane."

    MAX_VERBOSITY = 6

    def __init__(self, wires, transformation=None, half_sizes=(0.0, 0.0, 0.0), view=None):
        '''Create a plane from its `wires` (``WireGeo`` objects in world
        coordinates), the `transformation` placing the plane box in the
        world and the local `half_sizes` of that box.

        If `view` is not specified, it is deduced from the wire direction.
        '''
        self._wires = list(wires)
        if len(self._wires) == 0:
            raise ValueError('a wire plane needs at least one wire.')

        if transformation is None:
            transformation = Transformation()
        self._trans = transformation

        self._half_sizes = np.asarray(half_sizes, dtype=float)
        if self._half_sizes.shape != (3,):
            raise ValueError('plane half sizes must be a 3-vector.')

        self._fixed_view = view is not None
        self._view = View.UNKNOWN if view is None else View(view)
        self._orientation = Orientation.VERTICAL
        self._id = PlaneID()

        self._wire_pitch = 0.0
        self._pitch_spread = 0.0
        self._sin_phi_z = 0.0
        self._cos_phi_z = 1.0

        self._decomp_wire = Decomposer()
        self._decomp_frame = Decomposer()
        self._active_area = Rectangle(Range(0.0, 0.0), Range(0.0, 0.0))

        self._detect_geometry_directions()
        self._normal = self._normal_axis.copy()
        self._center = self.get_box_center()
        self._decomp_frame.set_reference_point(self._center)

    #
    # plane properties
    #

    @property
    def view(self):
        "Which coordinate this plane measures."
        return self._view

    def set_view(self, view):
        self._view = View(view)
        self._fixed_view = True

    @property
    def orientation(self):
        return self._orientation

    @property
    def id(self):
        return self._id

    def theta_z(self):
        "Angle of the wires from the positive z axis, in [0, pi]."
        return self._wires[0].theta_z()

    def phi_z(self):
        "Angle of the wire coordinate axis from the positive z axis [rad]."
        return np.arctan2(self._sin_phi_z, self._cos_phi_z)

    @property
    def sin_phi_z(self):
        return self._sin_phi_z

    @property
    def cos_phi_z(self):
        return self._cos_phi_z

    #
    # plane size and coordinates
    #

    @property
    def width_dir(self):
        return self._decomp_frame.main_dir

    @property
    def depth_dir(self):
        return self._decomp_frame.secondary_dir

    def width(self):
        return 2.0 * self._half_width

    def depth(self):
        return 2.0 * self._half_depth

    def bounding_box(self):
        "World box containing the plane box."
        return box_from_local_extents(self._trans, self._half_sizes)

    def get_center(self):
        '''Center of the plane: width and depth in the middle of the plane
        box, on the plane of the wires.'''
        return self._center.copy()

    def get_box_center(self):
        "Center of the box describing the plane, in world coordinates."
        return self._trans.to_world_point((0.0, 0.0, 0.0))

    #
    # wire access
    #

    def n_wires(self):
        return len(self._wires)

    def __len__(self):
        return len(self._wires)

    def __iter__(self):
        return iter(self._wires)

    def iterate_wires(self):
        return iter(self._wires)

    def has_wire(self, iwire):
        '''Whether wire number `iwire` (or the wire of a ``WireID``, ignoring
        the rest of the ID) is in this plane.'''
        if isinstance(iwire, WireID):
            iwire = iwire.wire
        return 0 <= iwire < len(self._wires)

    def wire(self, iwire):
        "Returns the wire number `iwire`; raises WireOutOfRangeError if none."
        if isinstance(iwire, WireID):
            iwire = iwire.wire
        if not self.has_wire(iwire):
            raise WireOutOfRangeError('plane %s has no wire #%d (it has %d)'
                                      % (self._id, iwire, len(self._wires)))
        return self._wires[iwire]

    def get_wire(self, iwire):
        "Returns the wire number `iwire`, or None if it does not exist."
        return self.wire(iwire) if self.has_wire(iwire) else None

    def first_wire(self):
        return self.wire(0)

    def middle_wire(self):
        return self.wire(len(self._wires) // 2)

    def last_wire(self):
        return self.wire(len(self._wires) - 1)

    #
    # plane geometry properties
    #

    def wire_pitch(self):
        "Distance between adjacent wires [cm], assumed constant."
        return self._wire_pitch

    def wire_pitch_estimate(self):
        '''The wire pitch and the spread of the measured wire spacings, as
        an ``uncertainties.ufloat``.  Evenly spaced wires have no spread, and
        the plain pitch is returned instead.'''
        if self._pitch_spread > 0.0:
            return ufloat(self._wire_pitch, self._pitch_spread)
        return self._wire_pitch

    def wire_id_increases_with_z(self):
        return self.increasing_wire_direction[2] > 0.0

    @property
    def normal_direction(self):
        "Unit vector normal to the plane, pointing toward the TPC center."
        return self._normal

    @property
    def increasing_wire_direction(self):
        return self._decomp_wire.secondary_dir

    @property
    def wire_direction(self):
        return self._decomp_wire.main_dir

    def closest_wire_id(self, wire):
        '''Returns the ID of the existing wire closest to the wire number
        `wire` (first or last wire, if out of range).

        If a ``WireID`` on a different plane is passed, it is returned marked
        as invalid.'''
        if isinstance(wire, WireID):
            if wire.as_plane_id() != self._id:
                return wire.invalidated()
            wire = wire.wire
        return WireID(self._id, min(max(int(wire), 0), len(self._wires) - 1))

    def nearest_wire_id(self, pos):
        '''Returns the ID of the wire closest to the projection of `pos` on
        the plane.

        Wires are treated as infinitely long.  If the nearest wire would be
        beyond the first or the last one, InvalidWireError is raised,
        carrying the nominal wire number and the closest existing wire.
        '''
        nominal = int(np.rint(self.wire_coordinate(pos)))
        if nominal < 0 or nominal >= len(self._wires):
            better = self.closest_wire_id(nominal)
            raise InvalidWireError('position %s is outside plane %s: nearest wire would be #%d, closest existing is %s'
                                   % (np.asarray(pos).tolist(), self._id, nominal, better),
                                   self._id, nominal, better)
        return WireID(self._id, nominal)

    def nearest_wire(self, pos):
        return self.wire(self.nearest_wire_id(pos))

    def distance_from_plane(self, point):
        '''Signed distance of `point` from the plane of the wires, positive
        on the side the normal points to.'''
        return self._decomp_wire.point_normal_component(point)

    def drift_point(self, point, distance=None):
        '''Returns `point` moved by `distance` against the normal direction;
        by default, all the way to the plane.'''
        if distance is None:
            distance = self.distance_from_plane(point)
        return np.asarray(point, dtype=float) - distance * self._normal

    def inter_wire_projected_distance(self, direction):
        '''Returns the distance between wires along `direction`, on the plane.

        `direction` is either a projection on the wire frame (2 components)
        or a 3D vector, which is projected first; its modulus is ignored.
        The result is never smaller than the pitch.  It grows without bound
        as the direction approaches the wire direction, and it is infinite
        when they are parallel: callers should check with ``np.isfinite()``.
        '''
        direction = np.asarray(direction, dtype=float)
        if direction.shape == (3,):
            direction = self.vector_projection(direction)
        sine = abs(direction[1]) / norm(direction)
        if sine == 0.0:
            return np.inf
        return self._wire_pitch / sine

    def inter_wire_distance(self, direction):
        '''Returns the 3D distance covered along `direction` going from one
        wire to the next; infinite if `direction` does not cross wires.'''
        cosine = abs(np.dot(normalize(direction), self.increasing_wire_direction))
        if cosine == 0.0:
            return np.inf
        return self._wire_pitch / cosine

    def active_area(self):
        '''Width/depth rectangle covering the projections of all the wire
        end points, reduced by half a pitch on each side.'''
        return self._active_area

    #
    # projections on the wire frame
    #

    def plane_coordinate_from(self, point, ref_wire):
        '''Coordinate of `point` in the direction measured by the wires,
        starting from `ref_wire` (which must belong to this plane) [cm].'''
        return self._decomp_wire.vector_secondary_component(
            np.asarray(point, dtype=float) - ref_wire.get_center())

    def plane_coordinate(self, point):
        "Coordinate of `point` measured by the wires, from the first wire [cm]."
        return self._decomp_wire.point_secondary_component(point)

    def wire_coordinate(self, point):
        "Like plane_coordinate(), in units of wire pitch."
        if self._wire_pitch == 0.0:
            raise GeometryError('plane %s has no wire pitch (%d wires)'
                                % (self._id, len(self._wires)))
        return self.plane_coordinate(point) / self._wire_pitch

    def decompose_point(self, point):
        return self._decomp_wire.decompose_point(point)

    def projection(self, point):
        "Projection of `point` on the wire frame (along wire, wire coordinate)."
        return self._decomp_wire.project_point_on_plane(point)

    def vector_projection(self, v):
        return self._decomp_wire.project_vector_on_plane(v)

    def compose_point(self, distance, projection=None):
        return self._decomp_wire.compose_point(distance, projection)

    def compose_vector(self, distance, projection=None):
        return self._decomp_wire.compose_vector(distance, projection)

    #
    # projections on the width/depth frame
    #

    def decompose_point_width_depth(self, point):
        return self._decomp_frame.decompose_point(point)

    def point_width_depth_projection(self, point):
        return self._decomp_frame.project_point_on_plane(point)

    def vector_width_depth_projection(self, v):
        return self._decomp_frame.project_vector_on_plane(v)

    def compose_point_width_depth(self, distance, projection=None):
        return self._decomp_frame.compose_point(distance, projection)

    def _plane_area(self):
        return Rectangle(Range(-self._half_width, self._half_width),
                         Range(-self._half_depth, self._half_depth))

    def is_projection_on_plane(self, point):
        "Whether the width/depth projection of `point` falls on the plane box."
        w, d = self.point_width_depth_projection(point)
        return self._plane_area().contains(w, d)

    def delta_from_plane(self, proj, w_margin=0.0, d_margin=None):
        '''Returns the width/depth displacement which brings `proj` on the
        plane area reduced by the margins (null if it is already there).'''
        return self._plane_area().delta(proj[0], proj[1], w_margin, d_margin)

    def delta_from_active_plane(self, proj, w_margin=0.0, d_margin=None):
        "Same as delta_from_plane(), for the active area."
        return self._active_area.delta(proj[0], proj[1], w_margin, d_margin)

    def move_projection_to_plane(self, proj):
        "Returns `proj` with width and depth capped to the plane area."
        return np.array([np.clip(proj[0], -self._half_width, self._half_width),
                         np.clip(proj[1], -self._half_depth, self._half_depth)])

    def move_point_over_plane(self, point):
        '''Returns `point` moved along width and depth so that its projection
        falls on the plane; the distance from the plane is unchanged.'''
        distance, proj = self.decompose_point_width_depth(point)
        return self.compose_point_width_depth(distance, self.move_projection_to_plane(proj))

    #
    # coordinate transformation
    #

    def to_world_coords(self, local):
        return self._trans.to_world_point(local)

    def to_world_vector(self, local):
        return self._trans.to_world_vector(local)

    def to_local_coords(self, world):
        return self._trans.to_local_point(world)

    def to_local_vector(self, world):
        return self._trans.to_local_vector(world)

    #
    # information
    #

    def plane_info(self, indent='', verbosity=1):
        '''Returns a description of the plane; the amount of information
        grows with `verbosity`, from 0 (only the ID) to 6 (bounding box).
        The first line is not indented.'''
        out = 'plane %s' % (self._id,)
        if verbosity <= 0:
            return out

        out += ' at %s cm, theta: %g rad' % (self._center.tolist(), self.theta_z())
        if verbosity <= 1:
            return out

        out += ('\n%snormal to wire: %g rad, with orientation %s, has %d wires measuring %s with a wire pitch of %s cm'
                % (indent, self.phi_z(), orientation_name(self._orientation),
                   len(self._wires), view_name(self._view), self.wire_pitch_estimate()))
        if verbosity <= 2:
            return out

        out += ('\n%snormal to plane: %s, direction of increasing wire number: %s [wire frame normal: %s] (%s with z)'
                % (indent, self._normal.tolist(), self.increasing_wire_direction.tolist(),
                   self._decomp_wire.normal_dir.tolist(),
                   'increases' if self.wire_id_increases_with_z() else 'decreases'))
        if verbosity <= 3:
            return out

        out += ('\n%swire direction: %s; width %g cm in direction: %s, depth %g cm in direction: %s [normal: %s]'
                % (indent, self.wire_direction.tolist(), self.width(), self.width_dir.tolist(),
                   self.depth(), self.depth_dir.tolist(), self._decomp_frame.normal_dir.tolist()))
        if verbosity <= 4:
            return out

        area = self._active_area
        out += ('\n%swires cover width %g to %g, depth %g to %g cm'
                % (indent, area.width.lower, area.width.upper, area.depth.lower, area.depth.upper))
        if verbosity <= 5:
            return out

        box = self.bounding_box()
        out += '\n%sbounding box: %s -- %s' % (indent, box.lower.tolist(), box.upper.tolist())
        return out

    view_name = staticmethod(view_name)
    orientation_name = staticmethod(orientation_name)

    #
    # sorting and update
    #

    def sort_wires(self, sorter):
        sorter.sort_wires(self._wires)

    def update_after_sorting(self, plane_id, tpc_box):
        '''Assigns the ID `plane_id` and recomputes all the derived
        quantities; `tpc_box` is the box of the TPC the plane belongs to.'''
        # the order matters
        self._id = plane_id
        self._update_plane_normal(tpc_box)
        self._update_increasing_wire_dir()
        self._flip_wires()
        self._update_wire_dir()
        self._update_wire_pitch()
        self._update_decomp_wire_origin()
        self._update_wire_plane_center()
        self._update_phi_z()
        self._update_view()
        self._update_orientation()
        self._update_active_area()
        logger.debug('updated %s', self.plane_info(verbosity=2))

    def _detect_geometry_directions(self):
        # the thinnest side of the box is across the plane; of the other two,
        # "width" is the one closer to the z axis
        axes = [self._trans.to_world_vector(e) for e in np.identity(3)]
        inormal = int(np.argmin(self._half_sizes))
        sides = [i for i in range(3) if i != inormal]
        iwidth = max(sides, key=lambda i: abs(axes[i][2]))
        idepth = sides[0] if iwidth == sides[1] else sides[1]

        width_dir = rounded01(normalize(axes[iwidth]), DIRECTION_TOLERANCE)
        if width_dir[dominant_axis(width_dir)] < 0.0:
            width_dir = -width_dir
        depth_dir = rounded01(normalize(axes[idepth]), DIRECTION_TOLERANCE)
        if depth_dir[dominant_axis(depth_dir)] < 0.0:
            depth_dir = -depth_dir

        self._decomp_frame.set_base(width_dir, depth_dir)
        self._half_width = self._half_sizes[iwidth]
        self._half_depth = self._half_sizes[idepth]
        self._normal_axis = rounded01(normalize(axes[inormal]), DIRECTION_TOLERANCE)

    def _update_plane_normal(self, tpc_box):
        normal = self._normal_axis
        if np.dot(tpc_box.get_center() - self.get_box_center(), normal) < 0.0:
            normal = -normal
        self._normal = normal

    def _update_increasing_wire_dir(self):
        # sign of the wire direction does not matter here
        coord_dir = normalize(np.cross(self._normal, self._wires[0].direction()))
        if len(self._wires) > 1:
            delta = self._wires[-1].get_center() - self._wires[0].get_center()
            if np.dot(delta, coord_dir) < 0.0:
                coord_dir = -coord_dir
        self._increasing_dir = rounded01(coord_dir, DIRECTION_TOLERANCE)

    def _flip_wires(self):
        # (wire, increasing wire, normal) must be a positive base
        expected = np.cross(self._increasing_dir, self._normal)
        for wire in self._wires:
            if np.dot(wire.direction(), expected) < 0.0:
                wire.flip()

    def _update_wire_dir(self):
        wire_dir = rounded01(self._wires[0].direction(), DIRECTION_TOLERANCE)
        coord_dir = rounded01(normalize(np.cross(self._normal, wire_dir)), DIRECTION_TOLERANCE)
        self._decomp_wire.set_base(wire_dir, coord_dir)

    def _update_wire_pitch(self):
        if len(self._wires) < 2:
            self._wire_pitch = 0.0
            self._pitch_spread = 0.0
            return
        coords = np.array([self._decomp_wire.vector_secondary_component(w.get_center())
                           for w in self._wires])
        spacings = np.abs(np.diff(coords))
        pitch = float(np.median(spacings))
        spread = float(np.median(np.abs(spacings - pitch)))
        self._wire_pitch = pitch
        self._pitch_spread = spread
        if spread > PITCH_SPREAD_TOLERANCE * pitch:
            logger.warning('plane %s: wires are not equally spaced (pitch %s cm)',
                           self._id, self.wire_pitch_estimate())

    def _update_decomp_wire_origin(self):
        self._decomp_wire.set_reference_point(self._wires[0].get_center())

    def _update_wire_plane_center(self):
        self._center = self.drift_point(self.get_box_center())
        self._decomp_frame.set_reference_point(self._center)

    def _update_phi_z(self):
        coord_dir = self.increasing_wire_direction
        self._sin_phi_z = coord_dir[1]
        self._cos_phi_z = coord_dir[2]

    def _update_view(self):
        if self._fixed_view:
            return
        wire_dir = self.wire_direction
        if abs(abs(self._normal[1]) - 1.0) < DIRECTION_TOLERANCE:
            # drift along y: wires lie on the x-z plane
            a, b = wire_dir[0], wire_dir[2]
            along_a, along_b = View.Z, View.X
        else:
            a, b = wire_dir[1], wire_dir[2]
            along_a, along_b = View.Z, View.Y
        if a < 0.0:
            a, b = -a, -b
        angle = np.arctan2(b, a)
        if abs(angle) < DIRECTION_TOLERANCE:
            self._view = along_a
        elif abs(abs(angle) - np.pi / 2) < DIRECTION_TOLERANCE:
            self._view = along_b
        elif angle > 0.0:
            self._view = View.U
        else:
            self._view = View.V

    def _update_orientation(self):
        if abs(abs(self._normal[1]) - 1.0) < DIRECTION_TOLERANCE:
            self._orientation = Orientation.HORIZONTAL
        elif abs(self._normal[1]) < DIRECTION_TOLERANCE:
            self._orientation = Orientation.VERTICAL
        else:
            raise GeometryError('plane %s has unsupported orientation (normal %s)'
                                % (self._id, self._normal.tolist()))

    def _update_active_area(self):
        ends = np.array([w.get_start() for w in self._wires]
                        + [w.get_end() for w in self._wires])
        proj = self._decomp_frame.project_point_on_plane(ends)
        width = Range(proj[:, 0].min(), proj[:, 0].max())
        depth = Range(proj[:, 1].min(), proj[:, 1].max())
        width.shrink(self._wire_pitch / 2.0)
        depth.shrink(self._wire_pitch / 2.0)
        self._active_area = Rectangle(width, depth)

    def __repr__(self):
        return '<PlaneGeo %s: %d wires, view %s>' % (self._id, len(self._wires), view_name(self._view))

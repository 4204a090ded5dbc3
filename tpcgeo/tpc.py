import numpy as np

from tpcgeo.box import BoxBoundedGeo, box_from_local_extents
from tpcgeo.constants import view_name
from tpcgeo.errors import GeometryError
from tpcgeo.ids import TPCID, PlaneID
from tpcgeo.transform import Transformation, dominant_axis

class TPCGeo(BoxBoundedGeo):
    '''A drift volume (TPC) and its wire planes.

    The TPC box is the world box containing the local box of `half_sizes`
    placed by `transformation`.  The active volume, where charge is
    collected, is centered on the same local origin with
    `active_half_sizes` (the whole TPC by default).
    '''
    def __init__(self, planes, transformation=None, half_sizes=(0.0, 0.0, 0.0),
                 active_half_sizes=None):
        if transformation is None:
            transformation = Transformation()
        self._trans = transformation
        self._half_sizes = np.asarray(half_sizes, dtype=float)
        if active_half_sizes is None:
            active_half_sizes = self._half_sizes
        self._active_half_sizes = np.asarray(active_half_sizes, dtype=float)

        box = box_from_local_extents(self._trans, self._half_sizes)
        BoxBoundedGeo.__init__(self, box.lower, box.upper)
        self._active_box = box_from_local_extents(self._trans, self._active_half_sizes)

        self._planes = list(planes)
        self._id = TPCID()

    @property
    def id(self):
        return self._id

    def n_planes(self):
        return len(self._planes)

    def __len__(self):
        return len(self._planes)

    def __iter__(self):
        return iter(self._planes)

    def has_plane(self, iplane):
        if isinstance(iplane, PlaneID):
            iplane = iplane.plane
        return 0 <= iplane < len(self._planes)

    def plane(self, iplane):
        if isinstance(iplane, PlaneID):
            iplane = iplane.plane
        if not self.has_plane(iplane):
            raise GeometryError('TPC %s has no plane #%d (it has %d)'
                                % (self._id, iplane, len(self._planes)))
        return self._planes[iplane]

    def get_plane(self, iplane):
        return self.plane(iplane) if self.has_plane(iplane) else None

    def first_plane(self):
        return self.plane(0)

    def last_plane(self):
        return self.plane(len(self._planes) - 1)

    def plane_for_view(self, view):
        "Returns the first plane measuring `view`."
        for plane in self._planes:
            if plane.view == view:
                return plane
        raise GeometryError('TPC %s has no plane with view %s' % (self._id, view_name(view)))

    def views(self):
        return set(plane.view for plane in self._planes)

    def max_wires(self):
        return max([plane.n_wires() for plane in self._planes] + [0])

    def get_center(self):
        "Center of the TPC box, in world coordinates."
        return self._trans.to_world_point((0.0, 0.0, 0.0))

    def get_active_volume_center(self):
        return self._active_box.get_center()

    def active_bounding_box(self):
        return self._active_box

    def active_half_sizes(self):
        return self._active_half_sizes.copy()

    def drift_direction(self):
        "Direction the electrons drift along, toward the planes."
        return -self.first_plane().normal_direction

    def drift_axis(self):
        "Index of the world axis closest to the drift direction."
        return dominant_axis(self.drift_direction())

    def drift_distance(self):
        '''Distance from the first plane to the far side of the active
        volume, along the drift direction.'''
        axis = self.drift_axis()
        half_size = self._active_box.half_sizes()[axis]
        center = self.get_active_volume_center()
        return abs(self.first_plane().distance_from_plane(center)) + half_size

    def plane_pitch(self, p1=0, p2=1):
        "Distance between the two planes along the drift direction."
        return abs(self.plane(p2).distance_from_plane(self.plane(p1).get_center()))

    def closest_plane_id(self, point):
        "ID of the plane nearest to `point` along the drift direction."
        distances = [abs(plane.distance_from_plane(point)) for plane in self._planes]
        return PlaneID(self._id, int(np.argmin(distances)))

    def to_world_coords(self, local):
        return self._trans.to_world_point(local)

    def to_local_coords(self, world):
        return self._trans.to_local_point(world)

    def sort_sub_volumes(self, sorter):
        sorter.sort_planes(self._planes)
        for plane in self._planes:
            plane.sort_wires(sorter)

    def update_after_sorting(self, tpc_id):
        self._id = tpc_id
        for iplane, plane in enumerate(self._planes):
            plane.update_after_sorting(PlaneID(tpc_id, iplane), self)

    def tpc_info(self, indent='', verbosity=1):
        out = 'TPC %s' % (self._id,)
        if verbosity <= 0:
            return out
        out += (' (%g x %g x %g) cm^3 at %s, with %d planes'
                % (self.size_x(), self.size_y(), self.size_z(),
                   self.get_center().tolist(), len(self._planes)))
        if verbosity <= 1:
            return out
        out += ('\n%sdrift direction %s, drift distance %g cm, active volume %s -- %s'
                % (indent, self.drift_direction().tolist(), self.drift_distance(),
                   self._active_box.lower.tolist(), self._active_box.upper.tolist()))
        return out

    def __repr__(self):
        return '<TPCGeo %s: %d planes>' % (self._id, len(self._planes))

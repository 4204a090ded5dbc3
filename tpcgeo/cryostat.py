import numpy as np

from tpcgeo.box import BoxBoundedGeo, box_from_local_extents
from tpcgeo.errors import GeometryError
from tpcgeo.ids import CryostatID, TPCID
from tpcgeo.transform import Transformation, norm

class OpDetGeo(object):
    "An optical detector, reduced to its center and size."
    def __init__(self, center, radius=0.0, name=''):
        self._center = np.array(center, dtype=float)
        if self._center.shape != (3,):
            raise ValueError('optical detector center must be a 3-vector.')
        self.radius = radius
        self.name = name

    def get_center(self):
        return self._center.copy()

    def distance(self, point):
        "Distance of `point` from the center of the detector."
        return norm(np.asarray(point, dtype=float) - self._center)

    def __repr__(self):
        return '<OpDetGeo %s at %s>' % (self.name, self._center.tolist())

class CryostatGeo(BoxBoundedGeo):
    "An enclosure holding TPCs and optical detectors."
    def __init__(self, tpcs, transformation=None, half_sizes=(0.0, 0.0, 0.0),
                 opdets=(), name=''):
        if transformation is None:
            transformation = Transformation()
        self._trans = transformation
        box = box_from_local_extents(self._trans, half_sizes)
        BoxBoundedGeo.__init__(self, box.lower, box.upper)

        self._tpcs = list(tpcs)
        self._opdets = list(opdets)
        self.name = name
        self._id = CryostatID()

    @property
    def id(self):
        return self._id

    def n_tpc(self):
        return len(self._tpcs)

    def __len__(self):
        return len(self._tpcs)

    def __iter__(self):
        return iter(self._tpcs)

    def has_tpc(self, itpc):
        if isinstance(itpc, TPCID):
            itpc = itpc.tpc
        return 0 <= itpc < len(self._tpcs)

    def tpc(self, itpc):
        if isinstance(itpc, TPCID):
            itpc = itpc.tpc
        if not self.has_tpc(itpc):
            raise GeometryError('cryostat %s has no TPC #%d (it has %d)'
                                % (self._id, itpc, len(self._tpcs)))
        return self._tpcs[itpc]

    def get_tpc(self, itpc):
        return self.tpc(itpc) if self.has_tpc(itpc) else None

    def max_planes(self):
        return max([tpc.n_planes() for tpc in self._tpcs] + [0])

    def max_wires(self):
        return max([tpc.max_wires() for tpc in self._tpcs] + [0])

    def get_center(self):
        return self._trans.to_world_point((0.0, 0.0, 0.0))

    def position_to_tpc_id(self, point, wiggle=1.0):
        '''Returns the ID of the TPC containing `point`, or an invalid one
        (with this cryostat number) if none does.'''
        for tpc in self._tpcs:
            if tpc.contains_position(point, wiggle):
                return tpc.id
        return TPCID(self._id, 0, is_valid=False)

    def position_to_tpc(self, point, wiggle=1.0):
        "Returns the TPC containing `point`, or None."
        tpcid = self.position_to_tpc_id(point, wiggle)
        return self.tpc(tpcid) if tpcid.is_valid else None

    def n_opdet(self):
        return len(self._opdets)

    def opdet(self, iopdet):
        if not 0 <= iopdet < len(self._opdets):
            raise GeometryError('cryostat %s has no optical detector #%d (it has %d)'
                                % (self._id, iopdet, len(self._opdets)))
        return self._opdets[iopdet]

    def iterate_opdets(self):
        return iter(self._opdets)

    def get_closest_opdet(self, point):
        "Index of the optical detector closest to `point`, or -1 if none."
        if not self._opdets:
            return -1
        return int(np.argmin([opdet.distance(point) for opdet in self._opdets]))

    def sort_sub_volumes(self, sorter):
        sorter.sort_tpcs(self._tpcs)
        for tpc in self._tpcs:
            tpc.sort_sub_volumes(sorter)
        sorter.sort_opdets(self._opdets)

    def update_after_sorting(self, cryo_id):
        self._id = cryo_id
        for itpc, tpc in enumerate(self._tpcs):
            tpc.update_after_sorting(TPCID(cryo_id, itpc))

    def cryostat_info(self, indent='', verbosity=1):
        out = 'cryostat %s' % (self._id,)
        if self.name:
            out += ' "%s"' % self.name
        if verbosity <= 0:
            return out
        out += (' (%g x %g x %g) cm^3 at %s, with %d TPCs and %d optical detectors'
                % (self.size_x(), self.size_y(), self.size_z(),
                   self.get_center().tolist(), len(self._tpcs), len(self._opdets)))
        return out

    def __repr__(self):
        return '<CryostatGeo %s: %d TPCs>' % (self._id, len(self._tpcs))
